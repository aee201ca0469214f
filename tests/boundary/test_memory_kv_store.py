"""
Test suite for InMemoryKeyValueStore.

System role: Verification of the development key-value store
"""

import pytest

from concierge.boundary.kv.memory_store import InMemoryKeyValueStore


class TestExpiry:
    """Test suite for TTL handling."""

    @pytest.mark.asyncio
    async def test_value_should_expire_at_ttl(self, kv_store: InMemoryKeyValueStore, fake_clock) -> None:
        """Test entries vanish once their TTL elapses."""
        await kv_store.set("k", "v", ttl_seconds=10)

        fake_clock.advance(9.9)
        assert await kv_store.get("k") == "v"

        fake_clock.advance(0.1)
        assert await kv_store.get("k") is None

    @pytest.mark.asyncio
    async def test_refresh_should_extend_ttl(self, kv_store: InMemoryKeyValueStore, fake_clock) -> None:
        """Test refresh restarts the expiry window."""
        await kv_store.set("k", "v", ttl_seconds=10)
        fake_clock.advance(8)

        assert await kv_store.refresh("k", 10) is True
        fake_clock.advance(8)

        assert await kv_store.get("k") == "v"

    @pytest.mark.asyncio
    async def test_refresh_missing_key_should_return_false(self, kv_store: InMemoryKeyValueStore) -> None:
        """Test refresh reports absent keys."""
        assert await kv_store.refresh("missing", 10) is False

    @pytest.mark.asyncio
    async def test_value_without_ttl_should_persist(self, kv_store: InMemoryKeyValueStore, fake_clock) -> None:
        """Test entries without TTL never expire."""
        await kv_store.set("k", "v")
        fake_clock.advance(10**9)

        assert await kv_store.get("k") == "v"


class TestKeysAndLists:
    """Test suite for prefix scans and lists."""

    @pytest.mark.asyncio
    async def test_keys_should_filter_by_prefix_and_liveness(
        self, kv_store: InMemoryKeyValueStore, fake_clock
    ) -> None:
        """Test expired keys are excluded from scans."""
        await kv_store.set("session:a", "1", ttl_seconds=5)
        await kv_store.set("session:b", "1", ttl_seconds=50)
        await kv_store.set("log:c", "1")
        fake_clock.advance(10)

        assert await kv_store.keys("session:") == ["session:b"]

    @pytest.mark.asyncio
    async def test_list_push_should_prepend(self, kv_store: InMemoryKeyValueStore) -> None:
        """Test list order is newest first, like LPUSH."""
        for value in ("a", "b", "c"):
            await kv_store.list_push("logs:day", value)

        assert await kv_store.list_range("logs:day") == ["c", "b", "a"]
        assert await kv_store.list_range("logs:day", 0, 1) == ["c", "b"]

    @pytest.mark.asyncio
    async def test_get_on_list_should_raise(self, kv_store: InMemoryKeyValueStore) -> None:
        """Test reading a list key as a string is a type error."""
        await kv_store.list_push("logs:day", "a")

        with pytest.raises(TypeError):
            await kv_store.get("logs:day")

    @pytest.mark.asyncio
    async def test_delete_should_remove_key(self, kv_store: InMemoryKeyValueStore) -> None:
        """Test delete is idempotent."""
        await kv_store.set("k", "v")

        await kv_store.delete("k")
        await kv_store.delete("k")

        assert await kv_store.get("k") is None
