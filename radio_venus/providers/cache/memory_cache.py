"""In-memory cache provider using cachetools.

Memoizes per-artist resolution results within a run.  Keys are namespaced
by the caller (``birth_date:<name key>``, ``tags:<name key>``) so one cache
serves every resolver in a :class:`~radio_venus.pipeline.context.RunContext`.
"""

from __future__ import annotations

from typing import Any

import structlog
from cachetools import TLRUCache

from radio_venus.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory cache with per-entry time-to-live.

    Backed by ``cachetools.TLRUCache``: each entry carries its own expiry so
    ``set(..., ttl=...)`` is honoured, falling back to the default TTL.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Default time-to-live in seconds.
    """

    def __init__(self, max_size: int = 5000, ttl: int = 6 * 3600) -> None:
        self._default_ttl = ttl
        self._cache: TLRUCache[str, tuple[float, Any]] = TLRUCache(
            maxsize=max_size, ttu=self._time_to_use
        )
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _time_to_use(_key: str, entry: tuple[float, Any], now: float) -> float:
        return now + entry[0]

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        entry = self._cache.get(key)
        if entry is None:
            self._misses += 1
            logger.debug("cache_miss", key=key)
            return None
        self._hits += 1
        logger.debug("cache_hit", key=key)
        return entry[1]

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        self._cache[key] = (float(ttl if ttl is not None else self._default_ttl), value)
        logger.debug("cache_set", key=key)

    async def delete(self, key: str) -> None:
        self._cache.pop(key, None)

    async def exists(self, key: str) -> bool:
        return key in self._cache

    # ------------------------------------------------------------------

    def clear(self) -> None:
        self._cache.clear()

    @property
    def stats(self) -> dict[str, int]:
        """Hit/miss counters since construction, logged at the end of a run."""
        return {"hits": self._hits, "misses": self._misses, "size": len(self._cache)}
