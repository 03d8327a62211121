"""Wire constants and defaults shared across the webhook receiver."""

from __future__ import annotations

# HTTP headers
WEBHOOK_SIGNATURE_HEADER = "x-codegen-signature"

SIGNATURE_PREFIX = "sha256="

# Webhook defaults
DEFAULT_WEBHOOK_MAX_AGE = 300  # 5 minutes
DEFAULT_WEBHOOK_VALIDATE_TIMESTAMP = True

# Receiver defaults
DEFAULT_BIND = "0.0.0.0"
DEFAULT_PORT = 8420
DEFAULT_WEBHOOK_PATH = "/webhooks/codegen"

# Error codes
INVALID_SIGNATURE = "INVALID_SIGNATURE"
WEBHOOK_VERIFICATION_FAILED = "WEBHOOK_VERIFICATION_FAILED"
HANDLER_FAILED = "HANDLER_FAILED"
