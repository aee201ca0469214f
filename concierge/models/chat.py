"""
Chat domain models and schemas.

Request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

from concierge.models.session import Provenance


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")
    message: str = Field(min_length=1, max_length=4000, description="User question or message")
    provider: str | None = Field(default=None, description="Optional completion provider name")


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    reply: str
    provenance: Provenance | None = None
