"""Listing cache domain service.

Comment listings are cached read-through, keyed by everything that shapes
a page. Invalidation is deliberately coarse: any mutation drops every
listing entry, so a listing read after a write never sees stale data.

The cache is an optimisation only. Every call is bounded by a timeout and
any failure degrades to a miss (reads) or a no-op (writes, invalidation).
"""

import asyncio
from typing import Optional

import logfire

from threadline.config import CacheSettings
from threadline.domain.value import CommentId, SortMode

from .base import Service

LISTING_NAMESPACE = "comments:"


class Cache:
    """Key-value cache with TTL and prefix deletion.

    Implementations are network-backed and fallible; they raise
    ``DependencyUnavailableError`` when the backend misbehaves.
    """

    async def get(self, key: str) -> Optional[str]:
        """Get a value, or None when the key is absent or expired."""
        raise NotImplementedError

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires after ``ttl_seconds``."""
        raise NotImplementedError

    async def delete_by_prefix(self, prefix: str) -> int:
        """Delete every key starting with ``prefix``.

        Returns:
            Number of keys deleted
        """
        raise NotImplementedError


class ListingCacheService(Service):
    """Fail-open read-through cache for comment listing pages."""

    def __init__(self, cache: Cache, cache_settings: CacheSettings) -> None:
        """Initialize listing cache service.

        Args:
            cache: Cache backend
            cache_settings: TTL and timeout configuration
        """
        self.cache = cache
        self.ttl_seconds = cache_settings.listing_ttl_seconds
        self.timeout_seconds = cache_settings.operation_timeout_seconds

    @staticmethod
    def listing_key(
        parent_id: CommentId | None, sort: SortMode, page: int, page_size: int
    ) -> str:
        """Build the cache key for one listing page."""
        scope = str(parent_id) if parent_id else "root"
        return f"{LISTING_NAMESPACE}{scope}:{sort.value}:{page}:{page_size}"

    async def get(self, key: str) -> Optional[str]:
        """Look up a cached page; any failure counts as a miss."""
        try:
            value = await asyncio.wait_for(self.cache.get(key), self.timeout_seconds)
        except Exception as e:
            logfire.warn("Cache get failed, treating as miss", key=key, error=str(e))
            return None

        logfire.debug("Listing cache lookup", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: str) -> None:
        """Store a page for the configured TTL; failures are logged and ignored."""
        try:
            await asyncio.wait_for(
                self.cache.set(key, value, self.ttl_seconds), self.timeout_seconds
            )
        except Exception as e:
            logfire.warn("Cache set failed", key=key, error=str(e))

    async def invalidate_namespace(self, prefix: str) -> None:
        """Drop every entry under ``prefix``; failures are logged and ignored."""
        with logfire.span("listing_cache.invalidate_namespace", prefix=prefix):
            try:
                deleted = await asyncio.wait_for(
                    self.cache.delete_by_prefix(prefix), self.timeout_seconds
                )
            except Exception as e:
                # Entries left behind expire with their TTL
                logfire.error("Cache invalidation failed", prefix=prefix, error=str(e))
                return
            logfire.info("Listing cache invalidated", prefix=prefix, deleted=deleted)

    async def invalidate_listings(self) -> None:
        """Drop every cached comment listing."""
        await self.invalidate_namespace(LISTING_NAMESPACE)
