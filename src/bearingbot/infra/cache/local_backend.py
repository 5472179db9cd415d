"""Single-process cache backend used when Redis is unavailable."""

from __future__ import annotations

import time
from datetime import timedelta

from .base import CacheBackend

# Expired entries are swept on every Nth write.
SWEEP_INTERVAL = 256


class LocalCacheBackend(CacheBackend):
    """In-process dict with read-time expiry and a periodic sweep."""

    def __init__(self, sweep_interval: int = SWEEP_INTERVAL) -> None:
        self._entries: dict[str, tuple[str, float | None]] = {}
        self._sweep_interval = max(1, sweep_interval)
        self._writes = 0

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> None:
        now = time.monotonic()
        self._writes += 1
        if self._writes % self._sweep_interval == 0:
            self._sweep(now)
        expires_at = now + ttl.total_seconds() if ttl else None
        self._entries[key] = (value, expires_at)

    def _sweep(self, now: float) -> None:
        expired = [
            key
            for key, (_, expires_at) in self._entries.items()
            if expires_at is not None and now >= expires_at
        ]
        for key in expired:
            del self._entries[key]

    async def aclose(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
