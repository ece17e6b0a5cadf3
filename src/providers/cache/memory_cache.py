"""In-memory cache provider using cachetools.TLRUCache.

Each entry carries its own time-to-live, so the 5-minute search cache
and the 1-hour setlist cache can share one implementation.  Expiry is
evaluated on read: an expired entry behaves exactly like a missing one.

Fast, but not shared across processes.  A Redis-backed adapter could
implement ICacheProvider for multi-worker deployments.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import structlog
from cachetools import TLRUCache

from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


def _time_to_use(_key: str, entry: tuple[Any, float], now: float) -> float:
    """Expiry timestamp for an entry stored as ``(value, ttl)``."""
    return now + entry[1]


class MemoryCacheProvider(ICacheProvider):
    """In-memory cache with per-entry TTL backed by ``cachetools.TLRUCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Default time-to-live in seconds when ``set`` is called without one.
    timer:
        Clock used for expiry; injectable so tests can advance time.
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl: float = 300,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = ttl
        self._cache: TLRUCache[str, tuple[Any, float]] = TLRUCache(
            maxsize=max_size, ttu=_time_to_use, timer=timer
        )

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or ``None`` if missing/expired."""
        entry = self._cache.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            return None
        logger.debug("cache_hit", key=key)
        return entry[0]

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store *value* under *key* for *ttl* seconds (default TTL when ``None``)."""
        effective_ttl = self._default_ttl if ttl is None else ttl
        self._cache[key] = (value, effective_ttl)
        logger.debug("cache_set", key=key, ttl=effective_ttl)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return key in self._cache

    async def clear(self) -> None:
        """Remove every entry."""
        self._cache.clear()
        logger.debug("cache_clear")

    def __len__(self) -> int:
        self._cache.expire()
        return len(self._cache)
