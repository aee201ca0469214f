"""
Session domain models and schemas.

Conversation state held in the key-value store plus request/response
schemas for session operations.

Dependencies: pydantic
System role: Session domain model and API contracts
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Provenance(BaseModel):
    """Retrieval metadata describing where an answer came from."""

    sources: list[dict[str, Any]] = Field(default_factory=list)
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    provider_name: str | None = None
    retrieval_counts: dict[str, int] = Field(default_factory=dict)


class Message(BaseModel):
    """Single conversation turn."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime | None = None
    sources: list[dict[str, Any]] | None = None
    confidence: float | None = None
    provider_name: str | None = None
    retrieval_counts: dict[str, int] | None = None


class Session(BaseModel):
    """Server-held conversational state for one visitor."""

    id: str
    started_at: datetime
    last_activity_at: datetime
    messages: list[Message] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
    contact_info: str | None = None
    client_identity: str | None = None


class StartSessionResponse(BaseModel):
    """Response schema for starting a session."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    message: str = "Session started successfully"


class SessionStatusResponse(BaseModel):
    """Response schema for session status."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    message_count: int = Field(alias="messageCount")
    started_at: datetime = Field(alias="startedAt")
    last_activity_at: datetime = Field(alias="lastActivityAt")
    contact_info: str | None = Field(default=None, alias="contactInfo")


class SessionStatsResponse(BaseModel):
    """Response schema for session statistics."""

    model_config = ConfigDict(populate_by_name=True)

    active_sessions: int = Field(alias="activeSessions")
    timestamp: datetime


class ContactRequest(BaseModel):
    """Request schema for attaching contact info to a session."""

    contact: str = Field(
        min_length=3,
        max_length=320,
        pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$",
        description="Visitor email address",
    )


class ContactResponse(BaseModel):
    """Response schema after contact info is stored."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    logs_updated: int = Field(alias="logsUpdated")
    export_queued: bool = Field(alias="exportQueued")
