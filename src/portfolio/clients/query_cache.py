"""
Query Cache
Keyed store of the most recent fetch result per request path.

Entries go stale ``stale_after`` seconds after they were written. Concurrent
fetches for the same key share a single in-flight task, so overlapping
refreshes never issue duplicate requests.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from ..logging_config import get_logger

logger = get_logger("portfolio.clients.query_cache")

Clock = Callable[[], float]
Fetcher = Callable[[], Awaitable[Any]]


@dataclass
class CacheEntry:
    data: Any
    updated_at: float


class QueryCache:
    """
    In-memory query cache.

    The clock is injectable so staleness can be tested without sleeping.
    """

    def __init__(self, stale_after: float = 1.0, clock: Optional[Clock] = None):
        self.stale_after = stale_after
        self.clock: Clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry] = {}
        self._in_flight: Dict[str, asyncio.Task] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def set(self, key: str, data: Any) -> CacheEntry:
        entry = CacheEntry(data=data, updated_at=self.clock())
        self._entries[key] = entry
        return entry

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def age(self, key: str) -> Optional[float]:
        """
        Seconds since the entry was written, or None when nothing is cached.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        return self.clock() - entry.updated_at

    def is_stale(self, key: str) -> bool:
        age = self.age(key)
        return age is None or age >= self.stale_after

    def is_fetching(self, key: str) -> bool:
        return key in self._in_flight

    async def fetch(self, key: str, fetcher: Fetcher) -> Any:
        """
        Run ``fetcher`` and cache its result under ``key``.

        If a fetch for ``key`` is already running, wait for it instead of
        starting another one. A cancelled caller does not cancel the shared
        fetch.
        """
        task = self._in_flight.get(key)
        if task is None:
            logger.debug("Cache fetch start key=%s", key)
            task = asyncio.ensure_future(self._run(key, fetcher))
            self._in_flight[key] = task
        else:
            logger.debug("Joining in-flight fetch key=%s", key)
        return await asyncio.shield(task)

    async def _run(self, key: str, fetcher: Fetcher) -> Any:
        try:
            data = await fetcher()
            self.set(key, data)
            return data
        finally:
            self._in_flight.pop(key, None)
