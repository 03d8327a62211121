"""Verified webhook processing: signature -> parse -> freshness -> dispatch."""

from __future__ import annotations

from datetime import datetime, timezone

from codegen_webhooks.config import WebhookHandlerConfig
from codegen_webhooks.constants import DEFAULT_WEBHOOK_MAX_AGE, DEFAULT_WEBHOOK_VALIDATE_TIMESTAMP
from codegen_webhooks.errors import MalformedPayload, SignatureInvalid, StaleOrFutureTimestamp
from codegen_webhooks.models import CodegenEventType
from codegen_webhooks.utils.logging import get_logger
from codegen_webhooks.webhooks.parser import parse_payload
from codegen_webhooks.webhooks.registry import HandlerRegistry, WebhookEventHandler
from codegen_webhooks.webhooks.signature import verify_signature
from codegen_webhooks.webhooks.timestamps import is_fresh

log = get_logger(__name__)


class WebhookHandler:
    """Verifies Codegen webhook deliveries and fans them out to handlers.

    Example::

        handler = create_webhook_handler(secret="...")
        handler.on("agent.completed", notify_team)
        await handler.process_webhook(raw_body, request.headers["x-codegen-signature"])
    """

    def __init__(self, config: WebhookHandlerConfig) -> None:
        self._config = config
        self._registry = HandlerRegistry()

    @property
    def config(self) -> WebhookHandlerConfig:
        return self._config

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def on(self, event: CodegenEventType | str, handler: WebhookEventHandler) -> WebhookHandler:
        self._registry.on(event, handler)
        return self

    def on_all(self, handler: WebhookEventHandler) -> WebhookHandler:
        self._registry.on_all(handler)
        return self

    def off(self, event: CodegenEventType | str, handler: WebhookEventHandler) -> WebhookHandler:
        self._registry.off(event, handler)
        return self

    def remove_all_listeners(self, event: CodegenEventType | str | None = None) -> WebhookHandler:
        self._registry.remove_all_listeners(event)
        return self

    def registered_events(self) -> tuple[CodegenEventType, ...]:
        return self._registry.registered_events()

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def verify_signature(self, body: str | bytes, signature: str) -> bool:
        return verify_signature(body, signature, self._config.secret)

    def is_fresh(self, timestamp: datetime, now: datetime | None = None) -> bool:
        return is_fresh(
            timestamp,
            now=now,
            max_age_seconds=self._config.max_age,
            enabled=self._config.validate_timestamp,
        )

    async def process_webhook(self, body: str | bytes, signature: str) -> None:
        """Verify, parse, check freshness, then dispatch to every matching handler.

        ``body`` must be the exact bytes the sender signed. Raises
        SignatureInvalid, MalformedPayload, StaleOrFutureTimestamp or
        HandlerExecutionFailure; nothing is retried here.
        """
        if not self.verify_signature(body, signature):
            log.warning("webhook_rejected", reason="invalid_signature")
            raise SignatureInvalid("Invalid webhook signature")

        try:
            payload = parse_payload(body)
        except MalformedPayload as exc:
            log.warning("webhook_rejected", reason="malformed_payload", error=str(exc))
            raise

        if not self.is_fresh(payload.timestamp, now=datetime.now(timezone.utc)):
            log.warning(
                "webhook_rejected",
                reason="stale_or_future_timestamp",
                webhook_event=payload.event.value,
                event_timestamp=payload.timestamp.isoformat(),
            )
            raise StaleOrFutureTimestamp(
                f"Webhook timestamp is too old or in the future: {payload.timestamp.isoformat()}"
            )

        log.debug(
            "webhook_verified",
            webhook_event=payload.event.value,
            session_id=payload.session_id,
        )
        await self._registry.dispatch(payload)
        log.info(
            "webhook_dispatched",
            webhook_event=payload.event.value,
            session_id=payload.session_id,
        )


def create_webhook_handler(
    secret: str,
    max_age: int = DEFAULT_WEBHOOK_MAX_AGE,
    validate_timestamp: bool = DEFAULT_WEBHOOK_VALIDATE_TIMESTAMP,
) -> WebhookHandler:
    """Build a WebhookHandler; raises ValueError when ``secret`` is empty."""
    return WebhookHandler(
        WebhookHandlerConfig(
            secret=secret,
            max_age=max_age,
            validate_timestamp=validate_timestamp,
        )
    )
