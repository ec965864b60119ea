"""Redis adapter."""

from reel.adapter.redis.cache import (
    FailingCacheClient,
    InMemoryCacheClient,
    RedisCacheClient,
)

__all__ = ["FailingCacheClient", "InMemoryCacheClient", "RedisCacheClient"]
