"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

from aiohttp import web

from codegen_webhooks.config import ServerConfig
from codegen_webhooks.constants import WEBHOOK_SIGNATURE_HEADER
from codegen_webhooks.errors import (
    HandlerExecutionFailure,
    MalformedPayload,
    SignatureInvalid,
    StaleOrFutureTimestamp,
)
from codegen_webhooks.utils.logging import get_logger
from codegen_webhooks.webhooks.handler import WebhookHandler

log = get_logger(__name__)


class WebhookServer:
    """Receives Codegen deliveries over HTTP and hands them to a WebhookHandler.

    Rejections map to 4xx so the sender does not retry them; handler
    failures map to 500 so the sender's own retry kicks in.
    """

    def __init__(self, config: ServerConfig, handler: WebhookHandler) -> None:
        self._config = config
        self._handler = handler
        self._runner: web.AppRunner | None = None

    @property
    def path(self) -> str:
        path = self._config.path
        return path if path.startswith("/") else f"/{path}"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        app = self._build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._config.bind, self._config.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=self._config.bind,
            port=self._config.port,
            path=self.path,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def _build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post(self.path, self._handle_webhook)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        # Signature covers the exact bytes received
        body = await request.read()
        signature = request.headers.get(WEBHOOK_SIGNATURE_HEADER, "")

        try:
            await self._handler.process_webhook(body, signature)
        except SignatureInvalid:
            return web.Response(status=401, text="Invalid signature")
        except StaleOrFutureTimestamp:
            return web.Response(status=401, text="Stale or future timestamp")
        except MalformedPayload:
            return web.Response(status=400, text="Malformed payload")
        except HandlerExecutionFailure as exc:
            log.error(
                "webhook_handlers_failed",
                webhook_event=exc.event,
                failed=len(exc.errors),
                handlers=exc.handler_count,
            )
            return web.Response(status=500, text="Handler failed")

        return web.Response(status=200, text="OK")
