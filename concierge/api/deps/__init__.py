"""
FastAPI dependency providers.
"""

from concierge.api.deps.dependencies import (
    ServiceCache,
    get_chat_limiter,
    get_chat_log_ledger,
    get_chat_service,
    get_content_synchronizer,
    get_knowledge_limiter,
    get_knowledge_service,
    get_optional_transcript_exporter,
    get_service_cache,
    get_session_store,
    get_settings_dependency,
    get_transcript_exporter,
    require_admin,
)

__all__ = [
    "ServiceCache",
    "get_chat_limiter",
    "get_chat_log_ledger",
    "get_chat_service",
    "get_content_synchronizer",
    "get_knowledge_limiter",
    "get_knowledge_service",
    "get_optional_transcript_exporter",
    "get_service_cache",
    "get_session_store",
    "get_settings_dependency",
    "get_transcript_exporter",
    "require_admin",
]
