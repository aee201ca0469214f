"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators (HTTP
clients, stores, limiters, providers) are built lazily once and cached in
a ServiceCache; tests swap them through app.dependency_overrides.

Dependencies: concierge.configs, concierge.application, concierge.boundary, concierge.core
System role: DI container for service injection
"""

import hmac
import logging

from fastapi import Depends, Header, HTTPException, status

from concierge.configs import Settings, get_settings
from concierge.application.services import ChatService, KnowledgeService
from concierge.core.exceptions import ConfigurationError
from concierge.core.content_sync import ContentSynchronizer
from concierge.core.export import ChatLogLedger, TranscriptExporter
from concierge.core.rate_limiter import FixedWindowRateLimiter
from concierge.core.session import SessionStore

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._kv_store = None
        self._cms_client = None
        self._vector_store = None
        self._provider_factory = None
        self._record_client = None
        self._knowledge_limiter = None
        self._chat_limiter = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def kv_store(self):
        """Get cached key-value store."""
        if self._kv_store is None:
            from concierge.boundary.kv.kv_store_factory import get_kv_store
            self._kv_store = get_kv_store()
        return self._kv_store

    @property
    def cms_client(self):
        """Get cached Sanity client."""
        if self._cms_client is None:
            from concierge.boundary.cms import SanityClient
            self._cms_client = SanityClient(self.settings.sanity)
        return self._cms_client

    @property
    def vector_store(self):
        """Get cached content vector store."""
        if self._vector_store is None:
            from concierge.boundary.vdb.vector_store_factory import get_vector_store
            self._vector_store = get_vector_store()
        return self._vector_store

    @property
    def provider_factory(self):
        """Get cached completion provider factory."""
        if self._provider_factory is None:
            from concierge.core.llm import CompletionProviderFactory
            self._provider_factory = CompletionProviderFactory(
                self.settings.llm,
                site_name=self.settings.site_name,
            )
        return self._provider_factory

    @property
    def record_client(self):
        """Get cached Notion record client."""
        if self._record_client is None:
            from concierge.boundary.recordkeeping import NotionRecordClient
            self._record_client = NotionRecordClient(self.settings.notion)
        return self._record_client

    @property
    def knowledge_limiter(self) -> FixedWindowRateLimiter:
        if self._knowledge_limiter is None:
            rl = self.settings.rate_limit
            self._knowledge_limiter = FixedWindowRateLimiter(
                limit=rl.knowledge_limit,
                window_seconds=rl.knowledge_window_seconds,
                sweep_interval_seconds=rl.sweep_interval_seconds,
                name="knowledge",
            )
        return self._knowledge_limiter

    @property
    def chat_limiter(self) -> FixedWindowRateLimiter:
        if self._chat_limiter is None:
            rl = self.settings.rate_limit
            self._chat_limiter = FixedWindowRateLimiter(
                limit=rl.chat_limit,
                window_seconds=rl.chat_window_seconds,
                sweep_interval_seconds=rl.sweep_interval_seconds,
                name="chat",
            )
        return self._chat_limiter

    def session_store(self) -> SessionStore:
        return SessionStore(self.kv_store, ttl_seconds=self.settings.session.ttl_seconds)

    def chat_log_ledger(self) -> ChatLogLedger:
        return ChatLogLedger(self.kv_store, ttl_seconds=self.settings.chat_log.ttl_seconds)

    async def aclose(self) -> None:
        """Close network clients that were actually created."""
        if self._cms_client is not None:
            await self._cms_client.close()
        if self._kv_store is not None:
            await self._kv_store.close()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._kv_store = None
        self._cms_client = None
        self._vector_store = None
        self._provider_factory = None
        self._record_client = None
        self._knowledge_limiter = None
        self._chat_limiter = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_session_store(cache: ServiceCache = Depends(get_service_cache)) -> SessionStore:
    return cache.session_store()


def get_chat_log_ledger(cache: ServiceCache = Depends(get_service_cache)) -> ChatLogLedger:
    return cache.chat_log_ledger()


def get_knowledge_limiter(cache: ServiceCache = Depends(get_service_cache)) -> FixedWindowRateLimiter:
    return cache.knowledge_limiter


def get_chat_limiter(cache: ServiceCache = Depends(get_service_cache)) -> FixedWindowRateLimiter:
    return cache.chat_limiter


def get_knowledge_service(cache: ServiceCache = Depends(get_service_cache)) -> KnowledgeService:
    """
    Get knowledge service instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        KnowledgeService: Knowledge service bound to the shared CMS client
    """
    return KnowledgeService(cache.cms_client)


def get_chat_service(
    cache: ServiceCache = Depends(get_service_cache),
    sessions: SessionStore = Depends(get_session_store),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        cache: Service cache (injected via Depends)
        sessions: Session store (injected via Depends)

    Returns:
        ChatService: Chat service wired to retrieval and providers
    """
    return ChatService(
        sessions=sessions,
        providers=cache.provider_factory,
        vector_store=cache.vector_store,
        top_k=cache.settings.vector_store.top_k,
        history_window=cache.settings.llm.history_window,
    )


def get_content_synchronizer(cache: ServiceCache = Depends(get_service_cache)) -> ContentSynchronizer:
    return ContentSynchronizer(cache.cms_client, cache.vector_store)


def get_transcript_exporter(
    cache: ServiceCache = Depends(get_service_cache),
    sessions: SessionStore = Depends(get_session_store),
    ledger: ChatLogLedger = Depends(get_chat_log_ledger),
) -> TranscriptExporter:
    """
    Get transcript exporter instance.

    Returns:
        TranscriptExporter: Exporter writing to the Notion database
    """
    notion = cache.settings.notion
    return TranscriptExporter(
        records=cache.record_client,
        ledger=ledger,
        sessions=sessions,
        pause_every=notion.pause_every,
        pause_seconds=notion.pause_seconds,
    )


def get_optional_transcript_exporter(
    cache: ServiceCache = Depends(get_service_cache),
    sessions: SessionStore = Depends(get_session_store),
    ledger: ChatLogLedger = Depends(get_chat_log_ledger),
) -> TranscriptExporter | None:
    """Get transcript exporter, or None when recordkeeping is not configured."""
    try:
        return get_transcript_exporter(cache=cache, sessions=sessions, ledger=ledger)
    except ConfigurationError as e:
        logger.warning(f"{__name__}:get_optional_transcript_exporter - Export disabled: {e}")
        return None


def require_admin(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    Reject requests without the admin bearer token.

    Raises:
        HTTPException: 401 if the token is missing or wrong, 503 if none is configured
    """
    expected = settings.admin.sync_token
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin token is not configured",
        )
    if not authorization or not hmac.compare_digest(authorization, f"Bearer {expected}"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
