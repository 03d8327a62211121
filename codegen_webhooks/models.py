"""Typed models for Codegen webhook payloads and the shared session vocabulary."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class AgentStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class CodegenEventType(str, Enum):
    AGENT_STARTED = "agent.started"
    AGENT_COMPLETED = "agent.completed"
    AGENT_FAILED = "agent.failed"
    AGENT_CANCELLED = "agent.cancelled"
    AGENT_PROGRESS = "agent.progress"
    TOOL_USED = "tool.used"
    FILE_CREATED = "file.created"
    FILE_UPDATED = "file.updated"
    FILE_DELETED = "file.deleted"


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

def _parse_timestamp(value: Any) -> datetime:
    """Accept ISO-8601 strings (or datetimes); naive values are read as UTC."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError as exc:
            raise ValueError(f"invalid ISO-8601 timestamp: {value!r}") from exc
    if not isinstance(value, datetime):
        raise ValueError("timestamp must be an ISO-8601 string")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


Timestamp = Annotated[datetime, BeforeValidator(_parse_timestamp)]


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ---------------------------------------------------------------------------
# Shared vocabulary
# ---------------------------------------------------------------------------

class CodegenError(_WireModel):
    code: str
    message: str
    details: dict[str, Any] | None = None
    timestamp: Timestamp


class AgentMetadata(_WireModel):
    start_time: Timestamp
    end_time: Timestamp | None = None
    duration: float | None = None  # milliseconds
    tokens_used: int | None = None
    files_modified: tuple[str, ...] | None = None
    tools_used: tuple[str, ...] | None = None


class SessionInfo(_WireModel):
    session_id: str
    status: AgentStatus
    created_at: Timestamp
    updated_at: Timestamp
    metadata: AgentMetadata


# ---------------------------------------------------------------------------
# Event data variants
# ---------------------------------------------------------------------------

class AgentStartedData(_WireModel):
    type: Literal["agent.started"]
    prompt: str
    session_id: str


class AgentCompletedData(_WireModel):
    type: Literal["agent.completed"]
    session_id: str
    result: str
    metadata: AgentMetadata


class AgentFailedData(_WireModel):
    type: Literal["agent.failed"]
    session_id: str
    error: CodegenError


class AgentCancelledData(_WireModel):
    type: Literal["agent.cancelled"]
    session_id: str
    reason: str | None = None


class AgentProgressData(_WireModel):
    type: Literal["agent.progress"]
    session_id: str
    message: str
    progress: float = Field(ge=0, le=100)


class ToolUsedData(_WireModel):
    type: Literal["tool.used"]
    session_id: str
    tool_name: str
    parameters: dict[str, Any]
    result: Any = None


class FileModifiedData(_WireModel):
    type: Literal["file.created", "file.updated", "file.deleted"]
    session_id: str
    file_path: str
    content: str | None = None


WebhookEventData = Annotated[
    Union[
        AgentStartedData,
        AgentCompletedData,
        AgentFailedData,
        AgentCancelledData,
        AgentProgressData,
        ToolUsedData,
        FileModifiedData,
    ],
    Field(discriminator="type"),
]


class WebhookEventPayload(_WireModel):
    """A single webhook delivery, validated end to end."""

    event: CodegenEventType
    session_id: str
    timestamp: Timestamp
    data: WebhookEventData

    @model_validator(mode="after")
    def _data_type_matches_event(self) -> WebhookEventPayload:
        if self.data.type != self.event.value:
            raise ValueError(
                f"data.type {self.data.type!r} does not match event {self.event.value!r}"
            )
        return self
