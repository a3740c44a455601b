"""Redis-backed cache."""

from typing import Optional

import logfire
from redis.asyncio import Redis
from redis.exceptions import RedisError

from threadline.adapter.error import CacheUnavailableError
from threadline.config import CacheSettings
from threadline.domain.service.cache_service import Cache


class RedisCache(Cache):
    """Cache stored in Redis with native key expiry."""

    def __init__(self, client: Redis, scan_batch_size: int = 500) -> None:
        """Initialize Redis cache.

        Args:
            client: Redis client created with ``decode_responses=True``
            scan_batch_size: Keys fetched per SCAN round and deleted per DEL
        """
        self.client = client
        self.scan_batch_size = scan_batch_size

    @classmethod
    def from_settings(cls, settings: CacheSettings) -> "RedisCache":
        """Create a cache with its own connection pool."""
        client = Redis.from_url(
            settings.url,
            decode_responses=True,
            socket_timeout=settings.socket_timeout_seconds,
            socket_connect_timeout=settings.socket_connect_timeout_seconds,
        )
        return cls(client, scan_batch_size=settings.scan_batch_size)

    async def get(self, key: str) -> Optional[str]:
        """Get a value by key."""
        try:
            return await self.client.get(key)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"GET failed: {e}") from e

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value with expiry."""
        try:
            await self.client.setex(key, ttl_seconds, value)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"SETEX failed: {e}") from e

    async def delete_by_prefix(self, prefix: str) -> int:
        """Delete keys under a prefix using SCAN, never KEYS.

        Keys written while the scan runs may survive; they expire with
        their TTL.
        """
        deleted = 0
        batch: list[str] = []
        try:
            async for key in self.client.scan_iter(
                match=f"{prefix}*", count=self.scan_batch_size
            ):
                batch.append(key)
                if len(batch) >= self.scan_batch_size:
                    deleted += await self.client.delete(*batch)
                    batch = []
            if batch:
                deleted += await self.client.delete(*batch)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"prefix delete failed: {e}") from e
        return deleted

    async def close(self) -> None:
        """Close the connection pool."""
        await self.client.aclose()
        logfire.info("Redis cache connection closed")
