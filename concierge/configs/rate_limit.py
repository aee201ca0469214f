"""
Rate limiting configuration settings.

Fixed-window limits for the public knowledge endpoint and the chat endpoint.

Dependencies: pydantic, pydantic_settings
System role: Admission control configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class RateLimitSettings(BaseSettings):
    """Per-client admission control limits."""

    knowledge_limit: int = Field(default=100, description="Requests per window for /knowledge")
    knowledge_window_seconds: float = Field(default=3600.0, description="Knowledge window length")
    chat_limit: int = Field(default=30, description="Chat turns per window per client")
    chat_window_seconds: float = Field(default=60.0, description="Chat window length")
    sweep_interval_seconds: float = Field(
        default=300.0,
        description="Interval of the background sweep removing expired records",
    )

    class Config:
        """Pydantic config."""

        env_prefix = "RATE_LIMIT_"
        case_sensitive = False
