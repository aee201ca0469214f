"""
Key-value store interface.

Contract shared by every durable store backing sessions, chat logs and
export flags. Sliding expiration is an explicit operation (refresh) rather
than a side effect of get, so each backend implements it the same way.

Dependencies: abc
System role: Storage boundary contract
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Async key-value store with TTLs and simple lists."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value for key, or None when absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store value under key, replacing any previous value and TTL."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key if present."""

    @abstractmethod
    async def refresh(self, key: str, ttl_seconds: int) -> bool:
        """
        Reset the TTL of an existing key.

        Returns:
            bool: False when the key does not exist
        """

    @abstractmethod
    async def keys(self, prefix: str) -> list[str]:
        """List live keys starting with prefix."""

    @abstractmethod
    async def list_push(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Prepend value to the list stored at key."""

    @abstractmethod
    async def list_range(self, key: str, start: int = 0, stop: int = -1) -> list[str]:
        """Return list items between start and stop inclusive (-1 means the end)."""

    async def close(self) -> None:
        """Release connections held by the store."""
