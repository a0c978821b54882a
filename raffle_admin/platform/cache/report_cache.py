"""
Report Cache

Short-lived cache for secondary reporting views (receivables, expenses,
productivity, draw list), keyed by query parameters.

The seat grid never goes through this cache; only views where a few seconds of
staleness is acceptable do. Mutations invalidate the affected key prefix.
"""

import time
from typing import Any, Awaitable, Callable, Dict, Optional, TypedDict

from raffle_admin.platform.logging.loguru_io import Logger


class CacheEntry(TypedDict):
    data: Any
    timestamp: float


def build_cache_key(namespace: str, **params: Any) -> str:
    """`build_cache_key('expenses', rango='dia')` → `expenses:rango=dia`"""
    parts = [f'{k}={params[k]}' for k in sorted(params) if params[k] is not None]
    return f'{namespace}:{"&".join(parts)}'


class ReportCache:
    def __init__(
        self, *, ttl_seconds: float = 30.0, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._cache: Dict[str, CacheEntry] = {}
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def _is_expired(self, *, entry: CacheEntry) -> bool:
        return self._clock() - entry['timestamp'] >= self._ttl_seconds

    def get(self, key: str) -> Optional[Any]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        if self._is_expired(entry=entry):
            del self._cache[key]
            return None
        return entry['data']

    def set(self, key: str, data: Any) -> None:
        self._cache[key] = {'data': data, 'timestamp': self._clock()}

    def invalidate(self, prefix: str) -> int:
        """Drop every entry whose key starts with `prefix`; returns how many were dropped."""
        stale = [key for key in self._cache if key.startswith(prefix)]
        for key in stale:
            del self._cache[key]
        if stale:
            Logger.base.debug(f'🧹 [CACHE] Invalidated {len(stale)} entries for "{prefix}"')
        return len(stale)

    def clear(self) -> None:
        self._cache.clear()

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Cached value for `key`, loading and storing it on a miss."""
        cached = self.get(key)
        if cached is not None:
            Logger.base.debug(f'📦 [CACHE] Hit "{key}"')
            return cached
        data = await loader()
        self.set(key, data)
        return data
