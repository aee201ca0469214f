"""
Test suite for the dependency injection container.

System role: Verification of service wiring
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException

from concierge.api.deps.dependencies import (
    ServiceCache,
    get_optional_transcript_exporter,
    get_transcript_exporter,
    require_admin,
)
from concierge.configs import Settings
from concierge.configs.kv_store import ChatLogSettings, SessionSettings
from concierge.configs.rate_limit import RateLimitSettings
from concierge.configs.recordkeeping import AdminSettings, NotionSettings
from concierge.core.exceptions import ConfigurationError


@pytest.fixture
def settings() -> Settings:
    """Provide settings with small limits and no Notion database."""
    return Settings(
        rate_limit=RateLimitSettings(knowledge_limit=5, knowledge_window_seconds=60, chat_limit=2, chat_window_seconds=10),
        session=SessionSettings(ttl_seconds=120),
        chat_log=ChatLogSettings(ttl_seconds=600),
        notion=NotionSettings(database_id=None, api_token=None),
        admin=AdminSettings(sync_token="tok"),
    )


@pytest.fixture
def cache(settings: Settings, kv_store) -> ServiceCache:
    """Provide cache with an injected in-memory store."""
    service_cache = ServiceCache(settings)
    service_cache._kv_store = kv_store
    return service_cache


class TestServiceCache:
    """Test suite for lazy cached collaborators."""

    def test_limiters_should_follow_settings_and_be_cached(self, cache: ServiceCache) -> None:
        """Test limiter construction from rate limit settings."""
        assert cache.knowledge_limiter.limit == 5
        assert cache.knowledge_limiter.window_seconds == 60
        assert cache.chat_limiter.limit == 2
        assert cache.chat_limiter is cache.chat_limiter

    def test_stores_should_use_configured_ttls(self, cache: ServiceCache, kv_store) -> None:
        """Test session and ledger TTLs come from settings."""
        assert cache.session_store().ttl_seconds == 120
        assert cache.chat_log_ledger().ttl_seconds == 600
        assert cache.session_store().kv is kv_store

    def test_clear_should_drop_instances(self, cache: ServiceCache) -> None:
        """Test clear resets cached collaborators."""
        limiter = cache.knowledge_limiter

        cache.clear()

        assert cache.knowledge_limiter is not limiter

    @pytest.mark.asyncio
    async def test_aclose_should_close_created_clients(self, cache: ServiceCache) -> None:
        """Test only instantiated clients are closed."""
        cms = MagicMock()
        cms.close = AsyncMock()
        cache._cms_client = cms
        cache._kv_store = MagicMock(close=AsyncMock())

        await cache.aclose()

        cms.close.assert_awaited_once()
        cache._kv_store.close.assert_awaited_once()


class TestTranscriptExporterDependency:
    """Test suite for optional export wiring."""

    def test_unconfigured_notion_should_raise_or_return_none(self, cache: ServiceCache) -> None:
        """Test the strict dependency raises and the optional one disables export."""
        sessions = cache.session_store()
        ledger = cache.chat_log_ledger()

        with pytest.raises(ConfigurationError):
            get_transcript_exporter(cache=cache, sessions=sessions, ledger=ledger)

        assert get_optional_transcript_exporter(cache=cache, sessions=sessions, ledger=ledger) is None


class TestRequireAdmin:
    """Test suite for the admin guard."""

    def test_valid_token_should_pass(self, settings: Settings) -> None:
        """Test the configured bearer token is accepted."""
        assert require_admin(authorization="Bearer tok", settings=settings) is None

    def test_wrong_token_should_raise_401(self, settings: Settings) -> None:
        """Test wrong tokens are rejected."""
        with pytest.raises(HTTPException) as exc_info:
            require_admin(authorization="Bearer nope", settings=settings)

        assert exc_info.value.status_code == 401
