"""One-line human summaries of webhook events."""

from __future__ import annotations

from codegen_webhooks.models import (
    AgentCancelledData,
    AgentCompletedData,
    AgentFailedData,
    AgentProgressData,
    AgentStartedData,
    FileModifiedData,
    ToolUsedData,
    WebhookEventPayload,
)
from codegen_webhooks.utils.labels import format_duration, get_event_label

_PREVIEW_LENGTH = 80


def _preview(text: str, limit: int = _PREVIEW_LENGTH) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def summarize_event(payload: WebhookEventPayload) -> str:
    """Render a webhook payload as e.g. ``[Agent Completed] s1: done in 3m 5s``."""
    data = payload.data
    label = get_event_label(payload.event)

    if isinstance(data, AgentStartedData):
        detail = f"prompt '{_preview(data.prompt)}'"

    elif isinstance(data, AgentCompletedData):
        detail = _preview(data.result) or "completed"
        if data.metadata.duration is not None:
            detail += f" in {format_duration(data.metadata.duration)}"

    elif isinstance(data, AgentFailedData):
        detail = f"{data.error.code}: {_preview(data.error.message)}"

    elif isinstance(data, AgentCancelledData):
        detail = f"cancelled ({data.reason})" if data.reason else "cancelled"

    elif isinstance(data, AgentProgressData):
        detail = f"{data.progress:g}% {_preview(data.message)}"

    elif isinstance(data, ToolUsedData):
        params = ", ".join(sorted(data.parameters))
        detail = f"{data.tool_name}({params})"

    elif isinstance(data, FileModifiedData):
        detail = data.file_path

    else:
        detail = payload.event.value

    return f"[{label}] {payload.session_id}: {detail}"
