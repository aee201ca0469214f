"""
Key-value store configuration settings.

Backs session blobs, per-day chat log indexes and export flags.

Dependencies: pydantic, pydantic_settings
System role: Durable key-value store configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class KeyValueStoreSettings(BaseSettings):
    """Key-value store configuration (in-memory for dev, Redis for prod)."""

    backend: str = Field(default="memory", description="Store backend: 'memory' or 'redis'")
    url: str | None = Field(default=None, description="Redis connection URL")

    class Config:
        """Pydantic config."""

        env_prefix = "KV_"
        case_sensitive = False


class SessionSettings(BaseSettings):
    """Chat session lifetime settings."""

    ttl_seconds: int = Field(default=86400, description="Sliding session TTL in seconds")

    class Config:
        """Pydantic config."""

        env_prefix = "SESSION_"
        case_sensitive = False


class ChatLogSettings(BaseSettings):
    """Per-turn chat log retention settings."""

    ttl_seconds: int = Field(default=604800, description="Chat log retention in seconds")

    class Config:
        """Pydantic config."""

        env_prefix = "CHAT_LOG_"
        case_sensitive = False
