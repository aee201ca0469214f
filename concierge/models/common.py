"""
Common response models and utilities.

Generic response wrappers and error schemas.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Additional error context")


class RateLimitedResponse(BaseModel):
    """Body returned with HTTP 429."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    error: str = "Rate limit exceeded"
    message: str
    retry_after: int = Field(alias="retryAfter")


class KnowledgeMeta(BaseModel):
    """Metadata block of a knowledge response."""

    model_config = ConfigDict(populate_by_name=True)

    count: int
    type: str
    query: str | None
    limit: int
    processing_time: int = Field(alias="processingTime")
    timestamp: str


class KnowledgeResponse(BaseModel):
    """Successful knowledge endpoint response."""

    success: bool = True
    data: list[dict[str, Any]]
    meta: KnowledgeMeta
