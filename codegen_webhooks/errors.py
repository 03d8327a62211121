"""Webhook error hierarchy."""

from __future__ import annotations

from codegen_webhooks.constants import HANDLER_FAILED, INVALID_SIGNATURE, WEBHOOK_VERIFICATION_FAILED


class WebhookError(Exception):
    """Base exception for all webhook processing errors.

    Concrete subclasses set ``code``.
    """

    code: str


class WebhookVerificationError(WebhookError):
    """Raised when a delivery is rejected before any handler runs."""

    code = WEBHOOK_VERIFICATION_FAILED


class SignatureInvalid(WebhookVerificationError):
    """The signature header does not match the HMAC of the raw body."""

    code = INVALID_SIGNATURE


class MalformedPayload(WebhookVerificationError):
    """The body is not JSON or does not match the event schema."""


class StaleOrFutureTimestamp(WebhookVerificationError):
    """The event timestamp falls outside the accepted age window."""


class HandlerExecutionFailure(WebhookError):
    """Raised after dispatch when one or more handlers failed.

    Every handler has settled by the time this is raised. ``errors`` holds
    each failure in registration order; the first is also chained as
    ``__cause__``.
    """

    code = HANDLER_FAILED

    def __init__(self, event: str, errors: list[BaseException], handler_count: int) -> None:
        self.event = event
        self.errors = errors
        self.handler_count = handler_count
        first = errors[0] if errors else None
        super().__init__(
            f"{len(errors)} of {handler_count} handler(s) failed for {event}: {first!r}"
        )
