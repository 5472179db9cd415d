"""Cache backend interface and errors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta


class CacheBackendError(Exception):
    """Raised by a backend when the underlying store cannot be reached."""


class CacheBackend(ABC):
    """Raw string key/value store with per-key expiry."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored string, or ``None`` when absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release any resources held by the backend."""
