"""Tests for the cache clients."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from reel.adapter.redis import InMemoryCacheClient, RedisCacheClient
from reel.config import CacheSettings
from reel.domain.error import CacheError


class TestInMemoryCacheClient:
    """Tests for the process-local cache client."""

    @pytest.mark.asyncio
    async def test_keys_are_prefixed_and_namespaced(self):
        client = InMemoryCacheClient(key_prefix="test")

        await client.set("comments", "video:1:page:1", "payload", 60)

        assert client.keys == ["test:comments:video:1:page:1"]
        assert await client.get("comments", "video:1:page:1") == "payload"
        assert await client.get("comment_threads", "video:1:page:1") is None

    @pytest.mark.asyncio
    async def test_delete_pattern_stays_inside_namespace(self):
        # Arrange
        client = InMemoryCacheClient()
        await client.set("comments", "video:a:page:1", "x", 60)
        await client.set("comments", "video:a:page:2", "x", 60)
        await client.set("comments", "video:b:page:1", "x", 60)
        await client.set("comment_threads", "video:a:page:1", "x", 60)

        # Act
        deleted = await client.delete_pattern("comments", "video:a:*")

        # Assert
        assert deleted == 2
        assert client.keys == [
            "reel:comment_threads:video:a:page:1",
            "reel:comments:video:b:page:1",
        ]

    @pytest.mark.asyncio
    async def test_delete_single_key(self):
        client = InMemoryCacheClient()
        await client.set("comments", "k", "v", 60)

        assert await client.delete("comments", "k") == 1
        assert await client.delete("comments", "k") == 0


class TestRedisCacheClient:
    """Tests for the Redis-backed client, with the connection stubbed out."""

    @pytest.mark.asyncio
    async def test_disabled_cache_is_a_permanent_miss(self):
        redis_client = MagicMock()
        client = RedisCacheClient(CacheSettings(enabled=False), client=redis_client)

        await client.set("comments", "k", "v", 60)
        result = await client.get("comments", "k")
        deleted = await client.delete_pattern("comments", "*")

        assert result is None
        assert deleted == 0
        redis_client.setex.assert_not_called()
        redis_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_set_uses_prefixed_key_and_ttl(self):
        redis_client = MagicMock()
        redis_client.setex = AsyncMock()
        client = RedisCacheClient(CacheSettings(key_prefix="reel"), client=redis_client)

        await client.set("comment_threads", "abc:limit:50", "payload", 300)

        redis_client.setex.assert_awaited_once_with(
            "reel:comment_threads:abc:limit:50", 300, "payload"
        )

    @pytest.mark.asyncio
    async def test_delete_pattern_scans_and_deletes_matches(self):
        # Arrange
        async def scan_iter(match):
            assert match == "reel:comments:video:v1:*"
            for key in ("reel:comments:video:v1:page:1", "reel:comments:video:v1:page:2"):
                yield key

        redis_client = MagicMock()
        redis_client.scan_iter = scan_iter
        redis_client.delete = AsyncMock(return_value=2)
        client = RedisCacheClient(CacheSettings(), client=redis_client)

        # Act
        deleted = await client.delete_pattern("comments", "video:v1:*")

        # Assert
        assert deleted == 2
        redis_client.delete.assert_awaited_once_with(
            "reel:comments:video:v1:page:1", "reel:comments:video:v1:page:2"
        )

    @pytest.mark.asyncio
    async def test_redis_errors_become_cache_errors(self):
        redis_client = MagicMock()
        redis_client.get = AsyncMock(side_effect=RedisConnectionError("refused"))
        client = RedisCacheClient(CacheSettings(), client=redis_client)

        with pytest.raises(CacheError, match="refused"):
            await client.get("comments", "k")
