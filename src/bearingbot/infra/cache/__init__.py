"""Session cache and its backends."""

from .base import CacheBackend, CacheBackendError
from .local_backend import LocalCacheBackend
from .redis_backend import RedisCacheBackend
from .session_cache import SessionCache, build_session_cache, get_session_cache

__all__ = [
    "build_session_cache",
    "CacheBackend",
    "CacheBackendError",
    "get_session_cache",
    "LocalCacheBackend",
    "RedisCacheBackend",
    "SessionCache",
]
