"""Raw body -> validated WebhookEventPayload."""

from __future__ import annotations

import json

from pydantic import ValidationError

from codegen_webhooks.errors import MalformedPayload
from codegen_webhooks.models import WebhookEventPayload


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors(include_url=False):
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def parse_payload(body: str | bytes) -> WebhookEventPayload:
    """Parse and schema-validate a webhook body.

    ``data.type`` selects the variant the event data is checked against and
    must equal ``event``. Raises MalformedPayload for invalid JSON and for
    any schema violation.
    """
    try:
        raw = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise MalformedPayload(f"Failed to parse webhook payload: {exc}") from exc

    try:
        return WebhookEventPayload.model_validate(raw)
    except ValidationError as exc:
        raise MalformedPayload(f"Invalid webhook payload: {_describe(exc)}") from exc
