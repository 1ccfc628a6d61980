"""Simple in-memory TTL cache. No Redis needed for MVP.

Expiry is enforced twice: lazily on every read, and eagerly by a one-shot
timer on the running event loop so entries that are never read again still
get reclaimed. Each write gets a generation number; a timer only removes the
entry it was scheduled for, never a newer write under the same key.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
data may be fetched twice (once per worker). There is no size bound.
"""

import asyncio
import itertools
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    expires_at: float | None
    generation: int

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


def _valid_ttl(ttl_seconds) -> bool:
    """A TTL counts only if it is a positive finite number."""
    if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, (int, float)):
        return False
    return math.isfinite(ttl_seconds) and ttl_seconds > 0


class TTLCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._store: dict[str, CacheEntry] = {}
        self._clock = clock
        self._generations = itertools.count(1)

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        try:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._store[key]
                return None
            return entry.value
        except Exception as e:
            logger.warning("Cache get failed for %s: %s", key, e)
            return None

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        """Store a value, replacing any previous entry.

        A missing, non-finite, zero or negative TTL means the entry never expires.
        """
        try:
            expires_at = None
            generation = next(self._generations)
            if _valid_ttl(ttl_seconds):
                expires_at = self._clock() + ttl_seconds
            self._store[key] = CacheEntry(value, expires_at, generation)
            if expires_at is not None:
                self._schedule_cleanup(key, generation, ttl_seconds)
        except Exception as e:
            logger.warning("Cache set failed for %s: %s", key, e)

    def clear(self) -> None:
        self._store.clear()

    def _schedule_cleanup(self, key: str, generation: int, delay: float) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop (sync caller); the read-side check still expires the entry.
            logger.debug("No running loop, skipping eager cleanup for %s", key)
            return
        loop.call_later(delay, self._evict_if_current, key, generation)

    def _evict_if_current(self, key: str, generation: int) -> None:
        entry = self._store.get(key)
        if entry is not None and entry.generation == generation:
            del self._store[key]
