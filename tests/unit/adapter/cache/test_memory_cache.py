"""Unit tests for InMemoryCache."""

import pytest

from threadline.adapter.cache.memory import InMemoryCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestInMemoryCache:
    """Tests for InMemoryCache."""

    @pytest.mark.asyncio
    async def test_get_missing_key(self):
        """Absent keys read as None."""
        # Arrange
        cache = InMemoryCache()

        # Act & Assert
        assert await cache.get("nope") is None

    @pytest.mark.asyncio
    async def test_entries_expire(self):
        """Entries vanish once their TTL has passed."""
        # Arrange
        clock = FakeClock()
        cache = InMemoryCache(clock=clock)
        await cache.set("k", "v", ttl_seconds=10)

        # Act
        clock.now = 9.9
        fresh = await cache.get("k")
        clock.now = 10.0
        expired = await cache.get("k")

        # Assert
        assert fresh == "v"
        assert expired is None
        assert cache.keys() == []

    @pytest.mark.asyncio
    async def test_set_overwrites_and_refreshes_ttl(self):
        """Writing a key again replaces value and expiry."""
        # Arrange
        clock = FakeClock()
        cache = InMemoryCache(clock=clock)
        await cache.set("k", "old", ttl_seconds=5)
        clock.now = 4

        # Act
        await cache.set("k", "new", ttl_seconds=5)
        clock.now = 8

        # Assert
        assert await cache.get("k") == "new"

    @pytest.mark.asyncio
    async def test_delete_by_prefix(self):
        """Only keys under the prefix are removed, and counted."""
        # Arrange
        cache = InMemoryCache()
        await cache.set("comments:root:newest:1:10", "a", 60)
        await cache.set("comments:abc:newest:1:10", "b", 60)
        await cache.set("other:1", "c", 60)

        # Act
        deleted = await cache.delete_by_prefix("comments:")

        # Assert
        assert deleted == 2
        assert cache.keys() == ["other:1"]
