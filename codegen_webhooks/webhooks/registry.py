"""Event-type -> handler registry with concurrent fan-out dispatch."""

from __future__ import annotations

import asyncio
import inspect
from typing import Awaitable, Callable

from codegen_webhooks.errors import HandlerExecutionFailure
from codegen_webhooks.models import CodegenEventType, WebhookEventPayload
from codegen_webhooks.utils.logging import get_logger

log = get_logger(__name__)

# Handlers may be plain functions or coroutine functions
WebhookEventHandler = Callable[[WebhookEventPayload], Awaitable[None] | None]


def _handler_name(handler: WebhookEventHandler) -> str:
    return getattr(handler, "__qualname__", repr(handler))


class HandlerRegistry:
    """Ordered handler lists keyed by event type.

    Registration methods return the registry so calls can be chained.
    """

    def __init__(self) -> None:
        self._handlers: dict[CodegenEventType, list[WebhookEventHandler]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def on(self, event: CodegenEventType | str, handler: WebhookEventHandler) -> HandlerRegistry:
        """Append a handler for one event type. Duplicates are kept."""
        event_type = CodegenEventType(event)
        self._handlers.setdefault(event_type, []).append(handler)
        return self

    def on_all(self, handler: WebhookEventHandler) -> HandlerRegistry:
        for event_type in CodegenEventType:
            self.on(event_type, handler)
        return self

    def off(self, event: CodegenEventType | str, handler: WebhookEventHandler) -> HandlerRegistry:
        """Remove every registration of ``handler`` for the event type."""
        event_type = CodegenEventType(event)
        handlers = self._handlers.get(event_type)
        if handlers is None:
            return self

        remaining = [h for h in handlers if h != handler]
        if remaining:
            self._handlers[event_type] = remaining
        else:
            del self._handlers[event_type]
        return self

    def remove_all_listeners(self, event: CodegenEventType | str | None = None) -> HandlerRegistry:
        if event is None:
            self._handlers.clear()
        else:
            self._handlers.pop(CodegenEventType(event), None)
        return self

    def registered_events(self) -> tuple[CodegenEventType, ...]:
        return tuple(self._handlers)

    def handler_count(self, event: CodegenEventType | str) -> int:
        return len(self._handlers.get(CodegenEventType(event), ()))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def dispatch(self, payload: WebhookEventPayload) -> None:
        """Run every handler for ``payload.event`` concurrently and wait for all.

        The handler list is copied up front, so registrations made while a
        dispatch is in flight only apply to later deliveries. If any handler
        fails, HandlerExecutionFailure is raised once all have settled.
        """
        handlers = list(self._handlers.get(payload.event, ()))
        if not handlers:
            log.debug("webhook_no_handlers", webhook_event=payload.event.value)
            return

        results = await asyncio.gather(
            *(self._invoke(handler, payload) for handler in handlers),
            return_exceptions=True,
        )

        errors: list[BaseException] = []
        for handler, result in zip(handlers, results):
            if isinstance(result, BaseException):
                log.error(
                    "webhook_handler_failed",
                    webhook_event=payload.event.value,
                    session_id=payload.session_id,
                    handler=_handler_name(handler),
                    error=repr(result),
                )
                errors.append(result)

        if errors:
            raise HandlerExecutionFailure(
                payload.event.value, errors, len(handlers)
            ) from errors[0]

    @staticmethod
    async def _invoke(handler: WebhookEventHandler, payload: WebhookEventPayload) -> None:
        result = handler(payload)
        if inspect.isawaitable(result):
            await result
