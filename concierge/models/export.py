"""
Transcript export models.

Per-turn chat logs persisted in the key-value store and the aggregate
counters returned by export passes.

Dependencies: pydantic
System role: Export data contracts
"""

from typing import Literal

from pydantic import BaseModel, Field


class ChatLog(BaseModel):
    """One question/answer turn awaiting export."""

    id: str
    session_id: str
    date: str
    time: str
    query: str
    response: str
    processing_time_ms: float = 0.0
    client_identity: str | None = None
    contact_info: str | None = None
    location: str | None = None


class ExportResult(BaseModel):
    """Aggregate counters for an export pass."""

    success: int = 0
    skipped: int = 0
    errors: int = 0
    error_details: list[str] = Field(default_factory=list)


class ConversationExportResult(BaseModel):
    """Outcome of a conversation-level export."""

    record_id: str
    action: Literal["created", "updated"]
    contact_info: str
    date: str
    turns: int


class ExportLogsResponse(BaseModel):
    """Response schema for the export-logs admin route."""

    success: bool = True
    date: str
    results: ExportResult
    message: str
