"""Tests for labels and event summaries."""

import pytest

from codegen_webhooks.models import AgentStatus, CodegenEventType, WebhookEventPayload
from codegen_webhooks.utils.labels import (
    format_duration,
    get_event_label,
    get_status_label,
    is_active_status,
    is_terminal_status,
)
from codegen_webhooks.webhooks.summary import summarize_event


TIMESTAMP = "2026-03-01T12:00:00Z"


def _payload(event: str, **data) -> WebhookEventPayload:
    return WebhookEventPayload.model_validate({
        "event": event,
        "sessionId": "s1",
        "timestamp": TIMESTAMP,
        "data": {"type": event, "sessionId": "s1", **data},
    })


class TestStatusHelpers:
    @pytest.mark.parametrize("status", ["completed", "failed", "cancelled"])
    def test_terminal(self, status):
        assert is_terminal_status(status) is True
        assert is_active_status(status) is False

    @pytest.mark.parametrize("status", [AgentStatus.IDLE, AgentStatus.RUNNING])
    def test_active(self, status):
        assert is_active_status(status) is True
        assert is_terminal_status(status) is False

    def test_status_labels(self):
        assert get_status_label("running") == "Running"
        assert get_status_label(AgentStatus.CANCELLED) == "Cancelled"

    def test_every_event_has_label(self):
        for event in CodegenEventType:
            assert get_event_label(event)
        assert get_event_label("tool.used") == "Tool Used"

    def test_unknown_status_raises(self):
        with pytest.raises(ValueError):
            get_status_label("paused")


class TestFormatDuration:
    @pytest.mark.parametrize(
        "ms, expected",
        [
            (0, "0ms"),
            (850, "850ms"),
            (1000, "1s"),
            (42_500, "42s"),
            (60_000, "1m"),
            (185_000, "3m 5s"),
            (3_600_000, "1h"),
            (7_800_000, "2h 10m"),
        ],
    )
    def test_format(self, ms, expected):
        assert format_duration(ms) == expected


class TestSummarizeEvent:
    def test_agent_started(self):
        summary = summarize_event(_payload("agent.started", prompt="Fix the login bug"))
        assert summary == "[Agent Started] s1: prompt 'Fix the login bug'"

    def test_long_prompt_truncated(self):
        summary = summarize_event(_payload("agent.started", prompt="x" * 500))
        assert summary.endswith("...'")
        assert len(summary) < 150

    def test_agent_completed_with_duration(self):
        summary = summarize_event(_payload(
            "agent.completed",
            result="All tests pass",
            metadata={"startTime": TIMESTAMP, "duration": 185_000},
        ))
        assert summary == "[Agent Completed] s1: All tests pass in 3m 5s"

    def test_agent_failed(self):
        summary = summarize_event(_payload(
            "agent.failed",
            error={"code": "TIMEOUT", "message": "took too long", "timestamp": TIMESTAMP},
        ))
        assert "TIMEOUT: took too long" in summary

    def test_agent_cancelled(self):
        assert summarize_event(_payload("agent.cancelled")).endswith("s1: cancelled")
        assert "(user)" in summarize_event(_payload("agent.cancelled", reason="user"))

    def test_agent_progress(self):
        summary = summarize_event(_payload("agent.progress", message="Running tests", progress=42.5))
        assert summary == "[Agent Progress] s1: 42.5% Running tests"

    def test_tool_used(self):
        summary = summarize_event(_payload(
            "tool.used", toolName="Edit", parameters={"path": "a.py", "content": "x"}
        ))
        assert summary == "[Tool Used] s1: Edit(content, path)"

    def test_file_deleted(self):
        summary = summarize_event(_payload("file.deleted", filePath="old.py"))
        assert summary == "[File Deleted] s1: old.py"
