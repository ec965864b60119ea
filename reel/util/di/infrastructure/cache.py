"""Cache infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from reel.adapter.redis import RedisCacheClient
from reel.config import CacheSettings
from reel.domain.service import CacheClient
from reel.util.di.base import ProviderBase
from reel.util.observability import instrument_redis


class CacheProvider(ProviderBase):
    """Read-cache component base."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider using Redis."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_cache_client(
        self, cache_settings: CacheSettings
    ) -> AsyncIterator[CacheClient]:
        """Provide the Redis cache client, closed on container shutdown."""
        if cache_settings.enabled:
            instrument_redis()
        client = RedisCacheClient(cache_settings)
        yield client
        await client.close()
