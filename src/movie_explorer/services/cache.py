"""Redis-backed JSON cache with graceful fallback.

The cache is never authoritative: every failure is logged and reported to the
caller as a miss (reads) or ``False`` (writes). The underlying client
reconnects on the next command, so one outage does not disable caching for
the lifetime of the process.
"""

import json
import logging
from typing import Any

from fastapi import Request
from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class CacheClient:
    """Async JSON cache. Disabled (always a miss) when ``url`` is None."""

    def __init__(self, url: str | None, socket_timeout: float = 2.0) -> None:
        self._url = url
        self._client: Redis | None = None
        if url:
            self._client = Redis.from_url(
                url,
                decode_responses=True,
                socket_connect_timeout=socket_timeout,
                socket_timeout=socket_timeout,
            )

    @property
    def enabled(self) -> bool:
        """Whether a Redis URL was configured."""
        return self._client is not None

    async def connect(self) -> None:
        """Check connectivity at startup. Never raises."""
        if not self._client:
            logger.info("Redis cache disabled by configuration")
            return
        if await self.ping():
            logger.info("Redis cache connected")
        else:
            logger.warning("Redis cache unreachable; lookups go to the origin until it recovers")

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        if not self._client:
            return False
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def get_json(self, key: str) -> dict[str, Any] | None:
        """Get a JSON object from cache.

        Returns None when the key is absent, Redis is unreachable, or the
        stored value is not a JSON object.
        """
        if not self._client:
            return None
        try:
            raw = await self._client.get(key)
        except RedisError as e:
            logger.warning("Cache GET failed for %s: %s", key, e)
            return None

        if raw is None:
            return None

        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding malformed cache entry for %s", key)
            return None

        if not isinstance(value, dict):
            logger.warning("Discarding non-object cache entry for %s", key)
            return None
        return value

    async def set_json(self, key: str, value: dict[str, Any], ttl: int) -> bool:
        """Store a JSON object with a TTL in seconds. Returns True on success."""
        if not self._client:
            return False
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.warning("Cannot serialize cache value for %s: %s", key, e)
            return False
        try:
            await self._client.setex(key, ttl, payload)
            return True
        except RedisError as e:
            logger.warning("Cache SET failed for %s: %s", key, e)
            return False

    async def delete(self, key: str) -> bool:
        """Delete a key. Returns True if a key was removed."""
        if not self._client:
            return False
        try:
            return bool(await self._client.delete(key))
        except RedisError as e:
            logger.warning("Cache DELETE failed for %s: %s", key, e)
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        if self._client:
            try:
                await self._client.aclose()
                logger.info("Redis connection closed")
            except RedisError as e:
                logger.warning("Error closing Redis connection: %s", e)
            finally:
                self._client = None


def get_cache(request: Request) -> CacheClient:
    """Return the application's cache, or a disabled one if none is configured."""
    cache: CacheClient | None = getattr(request.app.state, "cache", None)
    return cache if cache is not None else CacheClient(None)
