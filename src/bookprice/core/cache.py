# ABOUTME: Bounded, time-expiring cache for search results keyed by the normalized query.
# ABOUTME: Evicts least-recently-used entries past a maximum size; failed computations are not stored.

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

V = TypeVar("V")


@runtime_checkable
class ResultCache(Protocol):
    """Get-or-compute contract the search service relies on."""

    def get_or_compute(
        self, key: str, compute: Callable[[], V], ttl: float | None = None
    ) -> V: ...


def cache_key(query_text: str | None = None, isbn: str | None = None) -> str:
    """Canonical cache key for a pair of search parameters."""
    return f"search:q={query_text or ''}&isbn={isbn or ''}".lower()


class SearchCache:
    """In-process LRU cache with per-entry expiry.

    Concurrent misses on the same key may both compute; the last store wins.
    """

    def __init__(
        self,
        max_entries: int = 500,
        ttl: float = 600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._max_entries = max_entries
        self._ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> Any | None:
        """Return the live value for a key, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return value

    def put(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value, evicting least-recently-used entries if over capacity."""
        expires_at = self._clock() + (self._ttl if ttl is None else ttl)
        with self._lock:
            self._entries[key] = (expires_at, value)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def get_or_compute(
        self, key: str, compute: Callable[[], V], ttl: float | None = None
    ) -> V:
        """Return the cached value for key, computing and storing it on a miss."""
        cached = self.get(key)
        if cached is not None:
            logger.info("Cache hit for %s", key)
            return cached
        value = compute()
        self.put(key, value, ttl)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
