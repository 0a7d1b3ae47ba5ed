"""Data cache implementation."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from kubeconsole.constants.defaults import CACHE_MAX_ENTRIES_DEFAULT, CACHE_TTL_DEFAULT

logger = logging.getLogger(__name__)


class DataCache:
    """TTL-based data caching with bounded size.

    Reads are lock-free: asyncio is single-threaded and ``get`` performs no
    mutation. Expired entries stay in place until ``set`` evicts them.
    Writes take the lock so concurrent coroutines do not interleave.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_DEFAULT,
        max_entries: int = CACHE_MAX_ENTRIES_DEFAULT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()
        self._ttl = ttl_seconds
        self._max_entries = max(1, max_entries)
        self._clock = clock

    def __len__(self) -> int:
        return len(self._cache)

    def _is_expired(self, entry: dict[str, Any]) -> bool:
        age = self._clock() - entry["timestamp"]
        return age > (entry["ttl"] or self._ttl)

    async def get(self, key: str) -> Any:
        """Get cached data or None if missing or expired."""
        entry = self._cache.get(key)
        if entry is None or self._is_expired(entry):
            return None
        return entry["data"]

    async def set(self, key: str, data: Any, ttl: float | None = None) -> None:
        """Cache data with the current timestamp."""
        async with self._lock:
            self._cache[key] = {"data": data, "timestamp": self._clock(), "ttl": ttl}
            if len(self._cache) > self._max_entries:
                self._evict_expired_then_oldest()

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value, awaiting ``loader`` to fill a miss."""
        cached = await self.get(key)
        if cached is not None:
            return cached
        data = await loader()
        await self.set(key, data)
        return data

    def _evict_expired_then_oldest(self) -> None:
        """Evict expired entries first, then the oldest. Call under lock."""
        expired_keys = [k for k, entry in self._cache.items() if self._is_expired(entry)]
        for k in expired_keys:
            del self._cache[k]

        while len(self._cache) > self._max_entries:
            oldest_key = min(self._cache, key=lambda k: self._cache[k]["timestamp"])
            del self._cache[oldest_key]
        logger.debug("Cache evicted down to %d entries", len(self._cache))

    async def clear(self, key: str | None = None) -> None:
        """Clear cache for specific key or all."""
        async with self._lock:
            if key:
                self._cache.pop(key, None)
            else:
                self._cache.clear()
