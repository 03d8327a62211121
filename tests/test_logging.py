"""Tests for log redaction."""

from codegen_webhooks.utils.logging import _filter_sensitive


def _filter(**event_dict):
    return _filter_sensitive(None, "info", dict(event_dict))


class TestFilterSensitive:
    def test_signature_key_redacted(self):
        out = _filter(event="webhook_received", signature="sha256=abc")
        assert out["signature"] == "***REDACTED***"

    def test_secret_key_redacted(self):
        assert _filter(secret="hunter2")["secret"] == "***REDACTED***"

    def test_inline_secret_redacted(self):
        out = _filter(event="config", detail="secret=hunter2 port=8420")
        assert "hunter2" not in out["detail"]
        assert "port=8420" in out["detail"]

    def test_digest_in_text_redacted(self):
        digest = "sha256=" + "ab" * 32
        out = _filter(error=f"mismatch for {digest}")
        assert "ab" * 32 not in out["error"]

    def test_plain_values_untouched(self):
        out = _filter(event="webhook_dispatched", webhook_event="agent.started", count=3)
        assert out == {"event": "webhook_dispatched", "webhook_event": "agent.started", "count": 3}
