"""Cache infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from threadline.adapter.cache.redis import RedisCache
from threadline.config import CacheSettings
from threadline.domain.service import Cache
from threadline.util.di.base import ProviderBase


class CacheProvider(ProviderBase):
    """Cache component base."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider using Redis."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_cache(self, cache_settings: CacheSettings) -> AsyncIterator[Cache]:
        """Provide Redis cache, closed when the container closes."""
        cache = RedisCache.from_settings(cache_settings)
        yield cache
        await cache.close()
