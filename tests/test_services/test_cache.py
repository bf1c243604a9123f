"""Tests for the Redis-backed JSON cache.

Redis itself is mocked; what matters here is that every failure degrades to a
miss instead of an error.
"""

import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from movie_explorer.services.cache import CacheClient


@pytest.fixture
def redis_mock() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def cache(redis_mock: AsyncMock) -> CacheClient:
    """A cache whose Redis client is replaced by a mock."""
    client = CacheClient("redis://localhost:6379/0")
    client._client = redis_mock
    return client


class TestCacheDisabled:
    async def test_disabled_cache_is_always_a_miss(self) -> None:
        cache = CacheClient(None)
        await cache.connect()

        assert cache.enabled is False
        assert await cache.ping() is False
        assert await cache.get_json("any:key") is None
        assert await cache.set_json("any:key", {"a": 1}, ttl=60) is False
        assert await cache.delete("any:key") is False

        await cache.close()


class TestGetJson:
    async def test_hit(self, cache: CacheClient, redis_mock: AsyncMock) -> None:
        redis_mock.get.return_value = json.dumps({"Title": "Inception"})

        assert await cache.get_json("media:tt1375666") == {"Title": "Inception"}
        redis_mock.get.assert_awaited_once_with("media:tt1375666")

    async def test_absent_key(self, cache: CacheClient, redis_mock: AsyncMock) -> None:
        redis_mock.get.return_value = None

        assert await cache.get_json("media:tt1375666") is None

    async def test_redis_error_is_a_miss(self, cache: CacheClient, redis_mock: AsyncMock) -> None:
        redis_mock.get.side_effect = RedisConnectionError("connection refused")

        assert await cache.get_json("media:tt1375666") is None

    async def test_malformed_json_is_a_miss(
        self, cache: CacheClient, redis_mock: AsyncMock
    ) -> None:
        redis_mock.get.return_value = "{not json"

        assert await cache.get_json("media:tt1375666") is None

    async def test_non_object_is_a_miss(self, cache: CacheClient, redis_mock: AsyncMock) -> None:
        redis_mock.get.return_value = json.dumps(["a", "list"])

        assert await cache.get_json("media:tt1375666") is None

    async def test_recovers_after_failure(
        self, cache: CacheClient, redis_mock: AsyncMock
    ) -> None:
        redis_mock.get.side_effect = [RedisError("down"), json.dumps({"ok": True})]

        assert await cache.get_json("key") is None
        assert await cache.get_json("key") == {"ok": True}


class TestSetJson:
    async def test_set_with_ttl(self, cache: CacheClient, redis_mock: AsyncMock) -> None:
        assert await cache.set_json("search:matrix:all:all:1", {"Response": "True"}, 600) is True

        redis_mock.setex.assert_awaited_once_with(
            "search:matrix:all:all:1", 600, json.dumps({"Response": "True"})
        )

    async def test_redis_error_returns_false(
        self, cache: CacheClient, redis_mock: AsyncMock
    ) -> None:
        redis_mock.setex.side_effect = RedisError("read only replica")

        assert await cache.set_json("key", {"a": 1}, 60) is False

    async def test_unserializable_value_returns_false(
        self, cache: CacheClient, redis_mock: AsyncMock
    ) -> None:
        assert await cache.set_json("key", {"a": object()}, 60) is False
        redis_mock.setex.assert_not_awaited()


class TestConnectionHelpers:
    async def test_ping(self, cache: CacheClient, redis_mock: AsyncMock) -> None:
        redis_mock.ping.return_value = True
        assert await cache.ping() is True

        redis_mock.ping.side_effect = RedisConnectionError("down")
        assert await cache.ping() is False

    async def test_connect_never_raises(self, cache: CacheClient, redis_mock: AsyncMock) -> None:
        redis_mock.ping.side_effect = RedisConnectionError("down")

        await cache.connect()

        assert cache.enabled is True

    async def test_delete(self, cache: CacheClient, redis_mock: AsyncMock) -> None:
        redis_mock.delete.return_value = 1

        assert await cache.delete("media:tt1375666") is True

    async def test_close(self, cache: CacheClient, redis_mock: AsyncMock) -> None:
        await cache.close()
        await cache.close()

        redis_mock.aclose.assert_awaited_once()
        assert cache.enabled is False
