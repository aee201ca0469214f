"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from concierge.configs.base import BaseSettings
from concierge.configs.cms import SanitySettings
from concierge.configs.kv_store import (
    ChatLogSettings,
    KeyValueStoreSettings,
    SessionSettings,
)
from concierge.configs.llm import LLMSettings
from concierge.configs.rate_limit import RateLimitSettings
from concierge.configs.recordkeeping import AdminSettings, NotionSettings
from concierge.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    sanity: SanitySettings = SanitySettings()
    vector_store: VectorStoreSettings = VectorStoreSettings()
    kv_store: KeyValueStoreSettings = KeyValueStoreSettings()
    session: SessionSettings = SessionSettings()
    chat_log: ChatLogSettings = ChatLogSettings()
    llm: LLMSettings = LLMSettings()
    rate_limit: RateLimitSettings = RateLimitSettings()
    notion: NotionSettings = NotionSettings()
    admin: AdminSettings = AdminSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from concierge.configs import get_settings
        settings = get_settings()
    """
    return Settings()
