"""
In-process key-value store for local development and tests.

Same interface as RedisKeyValueStore; entries expire lazily on access.

Dependencies: time
System role: Local key-value store for development
"""

import time
from collections.abc import Callable
from typing import Any

from concierge.boundary.kv.base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store with per-key expiry."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._data: dict[str, tuple[Any, float | None]] = {}

    def _expires_at(self, ttl_seconds: int | None) -> float | None:
        return self._clock() + ttl_seconds if ttl_seconds else None

    def _live(self, key: str) -> Any | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def get(self, key: str) -> str | None:
        value = self._live(key)
        if isinstance(value, list):
            raise TypeError(f"Key {key} holds a list")
        return value

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        self._data[key] = (value, self._expires_at(ttl_seconds))

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def refresh(self, key: str, ttl_seconds: int) -> bool:
        value = self._live(key)
        if value is None:
            return False
        self._data[key] = (value, self._expires_at(ttl_seconds))
        return True

    async def keys(self, prefix: str) -> list[str]:
        return [key for key in list(self._data) if key.startswith(prefix) and self._live(key) is not None]

    async def list_push(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        items = self._live(key)
        if items is None:
            items = []
            expires_at = self._expires_at(ttl_seconds)
        else:
            expires_at = self._data[key][1]
            if ttl_seconds:
                expires_at = self._expires_at(ttl_seconds)
        items.insert(0, value)
        self._data[key] = (items, expires_at)

    async def list_range(self, key: str, start: int = 0, stop: int = -1) -> list[str]:
        items = self._live(key) or []
        if stop == -1:
            return list(items[start:])
        return list(items[start:stop + 1])
