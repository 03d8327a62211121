"""HMAC-SHA256 signature computation and validation."""

from __future__ import annotations

import hashlib
import hmac

from codegen_webhooks.constants import SIGNATURE_PREFIX


def _as_bytes(body: str | bytes) -> bytes:
    return body.encode("utf-8") if isinstance(body, str) else body


def compute_signature(body: str | bytes, secret: str) -> str:
    """Return the signature header value for a raw body, e.g. ``sha256=ab12...``."""
    digest = hmac.new(secret.encode("utf-8"), _as_bytes(body), hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(body: str | bytes, signature: str, secret: str) -> bool:
    """Validate a Codegen webhook HMAC-SHA256 signature.

    The comparison is constant-time. Never raises: a missing secret, a
    missing or blank signature and a length mismatch all return False.
    """
    if not secret:
        return False
    if not signature or not signature.strip():
        return False

    try:
        expected = compute_signature(body, secret).encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates in a str body or secret have no UTF-8 form
        return False
    provided = signature.encode("utf-8", errors="replace")
    if len(provided) != len(expected):
        return False
    return hmac.compare_digest(expected, provided)
