"""codegen-webhooks entry point: run the receiver, or sign a body for testing."""

from __future__ import annotations

import asyncio
import signal
import sys
from typing import BinaryIO

import click

from codegen_webhooks import __version__
from codegen_webhooks.config import Settings, load_settings
from codegen_webhooks.models import WebhookEventPayload
from codegen_webhooks.utils.logging import get_logger, setup_logging
from codegen_webhooks.webhooks.handler import WebhookHandler
from codegen_webhooks.webhooks.server import WebhookServer
from codegen_webhooks.webhooks.signature import compute_signature
from codegen_webhooks.webhooks.summary import summarize_event

log = get_logger(__name__)


def log_event(payload: WebhookEventPayload) -> None:
    """Default handler: one log line per verified delivery."""
    log.info(
        "codegen_event",
        webhook_event=payload.event.value,
        session_id=payload.session_id,
        summary=summarize_event(payload),
    )


def build_handler(settings: Settings) -> WebhookHandler:
    handler = WebhookHandler(settings.handler_config())
    handler.on_all(log_event)
    return handler


async def run(settings: Settings) -> None:
    server = WebhookServer(settings.server, build_handler(settings))

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    log.info("codegen_webhooks_starting", version=__version__)
    await server.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await server.stop()


@click.group()
@click.version_option(__version__, prog_name="codegen-webhooks")
def cli() -> None:
    """Receive and dispatch signed Codegen webhooks."""


@cli.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--port", type=int, default=None, help="Override the listen port")
def serve(config_path: str | None, log_level: str | None, port: int | None) -> None:
    """Start the webhook receiver."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    if port is not None:
        settings.server.port = port
    if not settings.webhook.secret.strip():
        raise click.UsageError(
            "No webhook secret configured. Set webhook.secret in the config "
            "file or CODEGEN_WEBHOOKS_WEBHOOK__SECRET."
        )
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    asyncio.run(run(settings))


@cli.command()
@click.argument("body_file", type=click.File("rb"), default="-")
@click.option("--secret", envvar="CODEGEN_WEBHOOKS_WEBHOOK__SECRET", required=True, help="Shared webhook secret")
def sign(body_file: BinaryIO, secret: str) -> None:
    """Print the signature header value for BODY_FILE (stdin by default)."""
    body = body_file.read()
    click.echo(compute_signature(body, secret))


if __name__ == "__main__":
    cli()
