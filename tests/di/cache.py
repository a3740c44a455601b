"""Mock cache providers for testing."""

from dishka import Scope, provide

from threadline.adapter.cache.memory import InMemoryCache
from threadline.domain.service import Cache
from threadline.util.di.infrastructure.cache import CacheProvider


class MockCacheProvider(CacheProvider):
    """Mock cache provider using a process-local dictionary."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_in_memory_cache(self) -> InMemoryCache:
        """Provide in-memory cache (also resolvable for inspection)."""
        return InMemoryCache()

    @provide(scope=Scope.APP)
    def get_cache(self, cache: InMemoryCache) -> Cache:
        """Provide in-memory cache as the cache port."""
        return cache
