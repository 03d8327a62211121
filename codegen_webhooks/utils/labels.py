"""Human-readable labels for statuses, events and durations."""

from __future__ import annotations

from codegen_webhooks.models import AgentStatus, CodegenEventType

_STATUS_LABELS: dict[AgentStatus, str] = {
    AgentStatus.IDLE: "Idle",
    AgentStatus.RUNNING: "Running",
    AgentStatus.COMPLETED: "Completed",
    AgentStatus.FAILED: "Failed",
    AgentStatus.CANCELLED: "Cancelled",
}

_EVENT_LABELS: dict[CodegenEventType, str] = {
    CodegenEventType.AGENT_STARTED: "Agent Started",
    CodegenEventType.AGENT_COMPLETED: "Agent Completed",
    CodegenEventType.AGENT_FAILED: "Agent Failed",
    CodegenEventType.AGENT_CANCELLED: "Agent Cancelled",
    CodegenEventType.AGENT_PROGRESS: "Agent Progress",
    CodegenEventType.TOOL_USED: "Tool Used",
    CodegenEventType.FILE_CREATED: "File Created",
    CodegenEventType.FILE_UPDATED: "File Updated",
    CodegenEventType.FILE_DELETED: "File Deleted",
}


def is_terminal_status(status: AgentStatus | str) -> bool:
    """True once an agent session can no longer change state."""
    return AgentStatus(status) in (
        AgentStatus.COMPLETED,
        AgentStatus.FAILED,
        AgentStatus.CANCELLED,
    )


def is_active_status(status: AgentStatus | str) -> bool:
    return AgentStatus(status) in (AgentStatus.RUNNING, AgentStatus.IDLE)


def get_status_label(status: AgentStatus | str) -> str:
    return _STATUS_LABELS[AgentStatus(status)]


def get_event_label(event: CodegenEventType | str) -> str:
    return _EVENT_LABELS[CodegenEventType(event)]


def format_duration(ms: float) -> str:
    """Format milliseconds as '850ms', '42s', '3m 5s' or '2h 10m'."""
    if ms < 1000:
        return f"{int(ms)}ms"

    seconds = int(ms // 1000)
    if seconds < 60:
        return f"{seconds}s"

    minutes, seconds = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {seconds}s" if seconds else f"{minutes}m"

    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m" if minutes else f"{hours}h"
