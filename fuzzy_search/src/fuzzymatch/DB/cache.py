# fuzzymatch/DB/cache.py
"""
Bounded, time-expiring result cache.

One store is shared by three key namespaces (see cache_key):
    query:<raw query>          -> Matches
    suggestion:<raw query>     -> Suggestions
    synonym:<word>             -> tuple of words
They share a single capacity budget, so a burst of suggestion lookups can
push query results out and vice versa.
"""
from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional

from ..config import CACHE_SIZE, CACHE_TTL

log = logging.getLogger(__name__)

QUERY = "query"
SUGGESTION = "suggestion"
SYNONYM = "synonym"


def cache_key(namespace: str, text: str) -> str:
    return f"{namespace}:{text}"


@dataclass(frozen=True, slots=True)
class CacheEntry:
    key: str
    value: Any
    inserted_at: float
    expires_at: float


class ResultCache:
    """
    LRU store with absolute per-entry expiry.

    get() treats an expired entry as absent and drops it; a hit moves the entry
    to the most-recent end. put() at capacity first purges expired entries,
    then evicts the least recently used one.
    """

    def __init__(self, capacity: int = CACHE_SIZE, ttl: float = CACHE_TTL,
                 *, clock: Callable[[], float] = time.monotonic) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = int(capacity)
        self.ttl = float(ttl)
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    # ------------- read -------------

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if entry.expires_at <= self._clock():
                del self._entries[key]
                log.debug("Cache entry expired: %s", key)
                return default
            self._entries.move_to_end(key)
            return entry.value

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            if entry is None:
                return False
            if entry.expires_at <= self._clock():
                del self._entries[entry.key]
                return False
            return True

    # ------------- write -------------

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.capacity:
                self._purge_expired(now)
                while len(self._entries) >= self.capacity:
                    old, _ = self._entries.popitem(last=False)
                    log.debug("Cache evicted: %s", old)
            self._entries[key] = CacheEntry(key, value, now, now + self.ttl)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    # ------------- introspection -------------

    def keys(self) -> List[str]:
        """Keys from least to most recently used (expired ones included)."""
        with self._lock:
            return list(self._entries)

    def entry(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # ------------- internals -------------

    def _purge_expired(self, now: float) -> None:
        stale = [k for k, e in self._entries.items() if e.expires_at <= now]
        for k in stale:
            del self._entries[k]
