"""
Key-value store factory for selecting between in-memory (dev) and Redis (prod).

Depends on KV_BACKEND environment variable.

Dependencies: concierge.boundary.kv, concierge.configs
System role: Key-value store instantiation and selection
"""

import logging

from concierge.boundary.kv.base import KeyValueStore
from concierge.boundary.kv.memory_store import InMemoryKeyValueStore
from concierge.configs import get_settings

logger = logging.getLogger(__name__)


def get_kv_store() -> KeyValueStore:
    """
    Factory function to get key-value store based on environment configuration.

    Returns:
        KeyValueStore: Configured store instance

    Raises:
        ValueError: If KV_BACKEND is invalid
    """
    settings = get_settings()
    backend = settings.kv_store.backend.lower()

    if backend == "memory":
        logger.info(f"{__name__}:get_kv_store - Creating in-memory store (local dev mode)")
        return InMemoryKeyValueStore()

    elif backend == "redis":
        from concierge.boundary.kv.redis_store import RedisKeyValueStore

        logger.info(f"{__name__}:get_kv_store - Creating Redis store (production mode)")
        return RedisKeyValueStore(url=settings.kv_store.url)

    else:
        raise ValueError(
            f"Invalid KV_BACKEND: {backend}. Must be 'memory' (dev) or 'redis' (production)."
        )
