"""Redis cache adapter.

Keys are laid out as ``<key_prefix>:<namespace>:<key>``, e.g.
``reel:comments:video:<id>:page:1:limit:20:sort:created_at:asc``.
"""

import fnmatch
import logging
import time

import redis.asyncio as redis
from redis.exceptions import RedisError

from reel.config import CacheSettings
from reel.domain.error import CacheError
from reel.domain.service.cache_service import CacheClient

logger = logging.getLogger(__name__)

# Keys removed per DEL round-trip during pattern purges
_DELETE_BATCH = 500


class RedisCacheClient(CacheClient):
    """Cache client backed by Redis.

    The connection is created lazily from ``CacheSettings.url``. With
    ``enabled=False`` every read is a miss and every write is dropped.
    """

    def __init__(self, settings: CacheSettings, client: redis.Redis | None = None):
        self.settings = settings
        self._client = client

    def _redis(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self.settings.url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=self.settings.socket_timeout,
                socket_connect_timeout=self.settings.socket_timeout,
            )
            logger.info("Redis cache client created for %s", self.settings.url)
        return self._client

    def _key(self, namespace: str, key: str) -> str:
        return f"{self.settings.key_prefix}:{namespace}:{key}"

    async def get(self, namespace: str, key: str) -> str | None:
        if not self.settings.enabled:
            return None
        try:
            return await self._redis().get(self._key(namespace, key))
        except RedisError as e:
            raise CacheError(f"Redis GET failed: {e}") from e

    async def set(self, namespace: str, key: str, value: str, ttl: int) -> None:
        if not self.settings.enabled:
            return
        try:
            await self._redis().setex(self._key(namespace, key), max(1, ttl), value)
        except RedisError as e:
            raise CacheError(f"Redis SETEX failed: {e}") from e

    async def delete(self, namespace: str, key: str) -> int:
        if not self.settings.enabled:
            return 0
        try:
            return await self._redis().delete(self._key(namespace, key))
        except RedisError as e:
            raise CacheError(f"Redis DEL failed: {e}") from e

    async def delete_pattern(self, namespace: str, pattern: str) -> int:
        """Delete matching keys, walking the keyspace with SCAN."""
        if not self.settings.enabled:
            return 0
        client = self._redis()
        deleted = 0
        batch: list[str] = []
        try:
            async for key in client.scan_iter(match=self._key(namespace, pattern)):
                batch.append(key)
                if len(batch) >= _DELETE_BATCH:
                    deleted += await client.delete(*batch)
                    batch = []
            if batch:
                deleted += await client.delete(*batch)
        except RedisError as e:
            raise CacheError(f"Redis pattern delete failed: {e}") from e
        return deleted

    async def close(self) -> None:
        """Close the underlying connection pool, if one was opened."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis cache client closed")


class InMemoryCacheClient(CacheClient):
    """Process-local cache client for development and testing.

    Honors TTLs and glob patterns the same way the Redis client does.
    """

    def __init__(self, key_prefix: str = "reel") -> None:
        self.key_prefix = key_prefix
        self._entries: dict[str, tuple[str, float]] = {}

    def _key(self, namespace: str, key: str) -> str:
        return f"{self.key_prefix}:{namespace}:{key}"

    def _purge_expired(self) -> None:
        now = time.monotonic()
        for full_key in [k for k, (_, exp) in self._entries.items() if exp <= now]:
            del self._entries[full_key]

    @property
    def keys(self) -> list[str]:
        """Live keys, fully prefixed."""
        self._purge_expired()
        return sorted(self._entries)

    async def get(self, namespace: str, key: str) -> str | None:
        self._purge_expired()
        entry = self._entries.get(self._key(namespace, key))
        return entry[0] if entry else None

    async def set(self, namespace: str, key: str, value: str, ttl: int) -> None:
        expires_at = time.monotonic() + max(1, ttl)
        self._entries[self._key(namespace, key)] = (value, expires_at)

    async def delete(self, namespace: str, key: str) -> int:
        return 1 if self._entries.pop(self._key(namespace, key), None) else 0

    async def delete_pattern(self, namespace: str, pattern: str) -> int:
        self._purge_expired()
        match = self._key(namespace, pattern)
        doomed = [k for k in self._entries if fnmatch.fnmatchcase(k, match)]
        for full_key in doomed:
            del self._entries[full_key]
        return len(doomed)


class FailingCacheClient(CacheClient):
    """Cache client whose every call fails, for exercising degraded mode."""

    async def get(self, namespace: str, key: str) -> str | None:
        raise CacheError("cache unavailable")

    async def set(self, namespace: str, key: str, value: str, ttl: int) -> None:
        raise CacheError("cache unavailable")

    async def delete(self, namespace: str, key: str) -> int:
        raise CacheError("cache unavailable")

    async def delete_pattern(self, namespace: str, pattern: str) -> int:
        raise CacheError("cache unavailable")
