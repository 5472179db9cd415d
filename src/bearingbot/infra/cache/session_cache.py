"""Typed cache-aside facade over a ``CacheBackend``.

Values are stored as JSON produced by pydantic ``TypeAdapter`` so that
both plain strings (memoized answers, tool results) and models
(``ConversationContext``) round-trip through the same store.

Every failure is absorbed here: an unreachable store or a value that no
longer deserializes is a miss on read, and a failed write is dropped.
Callers never see cache errors.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from datetime import timedelta
from typing import Annotated, Any, TypeVar

from fastapi import Depends, FastAPI, Request
from pydantic import TypeAdapter, ValidationError
from redis.asyncio import Redis

from bearingbot.configs.config import AppConfig, get_app_config
from bearingbot.infra.lifespan import get_app
from bearingbot.infra.redis import build_redis

from .base import CacheBackend, CacheBackendError
from .local_backend import LocalCacheBackend
from .redis_backend import RedisCacheBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionCache:
    """Key/value cache with per-key TTL and typed (de)serialization."""

    def __init__(self, backend: CacheBackend, key_prefix: str = "") -> None:
        self._backend = backend
        self._key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def get(self, key: str, type_: type[T]) -> T | None:
        """Return the value under *key*, or ``None`` on miss or error."""
        try:
            raw = await self._backend.get(self._key(key))
        except CacheBackendError:
            logger.warning("Cache read failed for %s", key, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return TypeAdapter(type_).validate_json(raw)
        except ValidationError:
            logger.warning("Discarding undecodable cache entry %s", key)
            return None

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store *value* under *key*; failures are logged and dropped."""
        try:
            raw = TypeAdapter(type(value)).dump_json(value).decode()
            await self._backend.set(self._key(key), raw, ttl)
        except Exception:
            logger.warning("Cache write failed for %s", key, exc_info=True)

    async def aclose(self) -> None:
        await self._backend.aclose()


# ---------------------------------------------------------------------------
# Lifespan + per-request dependencies
# ---------------------------------------------------------------------------


async def build_session_cache(
    app: Annotated[FastAPI, Depends(get_app)],
    config: Annotated[AppConfig, Depends(get_app_config)],
    redis: Annotated[Redis | None, Depends(build_redis)],
) -> AsyncGenerator[None, None]:
    """Attach a ``SessionCache`` to ``app.state`` (Redis or in-process)."""
    backend: CacheBackend
    if redis is not None:
        backend = RedisCacheBackend(redis)
    else:
        backend = LocalCacheBackend()
    cache = SessionCache(backend, key_prefix=config.cache.key_prefix)
    app.state.session_cache = cache
    yield
    await cache.aclose()


def get_session_cache(request: Request) -> SessionCache:
    """Return the ``SessionCache`` from ``app.state``."""
    return request.app.state.session_cache
