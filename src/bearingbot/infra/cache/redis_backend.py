"""Distributed cache backend on a shared Redis instance."""

from __future__ import annotations

import logging
from datetime import timedelta

from redis.asyncio import Redis
from redis.exceptions import RedisError

from .base import CacheBackend, CacheBackendError

logger = logging.getLogger(__name__)


class RedisCacheBackend(CacheBackend):
    """String GET/SET with ``EX`` expiry.

    The client is owned by the ``build_redis`` lifespan dependency, so
    ``aclose`` does not close it.
    """

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def get(self, key: str) -> str | None:
        try:
            value = await self._redis.get(key)
        except (RedisError, UnicodeDecodeError) as e:
            raise CacheBackendError(f"GET {key} failed: {e}") from e
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes) else str(value)

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> None:
        ex = max(1, int(ttl.total_seconds())) if ttl else None
        try:
            await self._redis.set(key, value, ex=ex)
        except RedisError as e:
            raise CacheBackendError(f"SET {key} failed: {e}") from e

    async def aclose(self) -> None:
        pass
