"""
Redis-backed key-value store.

Production store for session blobs, chat log indexes and export flags.

Dependencies: redis (asyncio client)
System role: Durable key-value store for production
"""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from concierge.boundary.kv.base import KeyValueStore
from concierge.core.exceptions import KeyValueStoreError

logger = logging.getLogger(__name__)


class RedisKeyValueStore(KeyValueStore):
    """KeyValueStore implementation over redis-py's asyncio client."""

    def __init__(self, url: str | None = None, client: Redis | None = None) -> None:
        """
        Initialize Redis store.

        Args:
            url: Redis connection URL (ignored when client is given)
            client: Pre-built Redis client
        """
        if client is None:
            if not url:
                raise KeyValueStoreError("KV_URL is required for the redis backend")
            client = Redis.from_url(url, decode_responses=True)
        self._client = client

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except RedisError as e:
            raise KeyValueStoreError(f"GET {key} failed: {e}") from e

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            raise KeyValueStoreError(f"SET {key} failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as e:
            raise KeyValueStoreError(f"DEL {key} failed: {e}") from e

    async def refresh(self, key: str, ttl_seconds: int) -> bool:
        try:
            return bool(await self._client.expire(key, ttl_seconds))
        except RedisError as e:
            raise KeyValueStoreError(f"EXPIRE {key} failed: {e}") from e

    async def keys(self, prefix: str) -> list[str]:
        try:
            return [key async for key in self._client.scan_iter(match=f"{prefix}*")]
        except RedisError as e:
            raise KeyValueStoreError(f"SCAN {prefix}* failed: {e}") from e

    async def list_push(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        try:
            await self._client.lpush(key, value)
            if ttl_seconds:
                await self._client.expire(key, ttl_seconds)
        except RedisError as e:
            raise KeyValueStoreError(f"LPUSH {key} failed: {e}") from e

    async def list_range(self, key: str, start: int = 0, stop: int = -1) -> list[str]:
        try:
            return await self._client.lrange(key, start, stop)
        except RedisError as e:
            raise KeyValueStoreError(f"LRANGE {key} failed: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()
        logger.info(f"{__name__}:close - Redis connection closed")
