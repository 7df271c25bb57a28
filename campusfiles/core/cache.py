"""In-memory TTL cache for expensive database reads.

Callers use it read-through: compute a key, ``get`` it, and on a miss run
the query and ``set`` the result with a TTL from :class:`CacheTTL`. Write
paths drop the affected keys with ``invalidate_by_prefix`` right after the
commit, so the TTL only bounds staleness for reads nobody invalidated.

Stale entries are evicted lazily by ``get`` and eagerly by ``cleanup``,
which the application runs on a timer (see ``campusfiles.workers.cleanup``).
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class _Missing:
    """Sentinel type for a cache miss."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


# Returned by CacheStore.get on a miss; never equal to a cached value.
MISSING: Any = _Missing()


class CacheTTL:
    """TTL policy per resource class, in seconds."""

    COURSES = 10 * 60
    DASHBOARD_STATS = 5 * 60
    RECENT_FILES = 1 * 60


@dataclass(slots=True)
class CacheEntry:
    data: Any
    created_at: float
    ttl: float


@dataclass
class CacheStats:
    size: int
    keys: list[str] = field(default_factory=list)


def cache_key(*parts: object) -> str:
    """Join key parts with ``:``, e.g. ``cache_key("files", "page", 0)``.

    Each part is percent-encoded, so a ``:`` inside a value cannot shift the
    fields of one key onto another.
    """
    return ":".join(quote(str(p), safe="") for p in parts)


class CacheStore:
    """Key -> entry map with per-entry TTL.

    Every operation holds the instance lock for its whole duration. Never
    call into the store while holding a fetch open on its behalf; the lock
    is only meant to cover map access.
    """

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Raw membership; does not evict.
        with self._lock:
            return key in self._entries

    def _is_stale(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at > entry.ttl

    def set(self, key: str, data: Any, ttl: float) -> None:
        """Store ``data`` under ``key`` for ``ttl`` seconds, replacing any previous entry."""
        entry = CacheEntry(data=data, created_at=self._clock(), ttl=ttl)
        with self._lock:
            self._entries[key] = entry

    def get(self, key: str, default: Any = MISSING) -> Any:
        """Return the cached value, or ``default`` if absent or expired.

        An expired entry is deleted as a side effect.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache miss: %s", key)
                return default
            if self._is_stale(entry, self._clock()):
                del self._entries[key]
                logger.debug("Cache expired: %s", key)
                return default
            logger.debug("Cache hit: %s", key)
            return entry.data

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def invalidate_by_prefix(self, prefix: str) -> int:
        """Remove every key starting with ``prefix``. ``""`` matches all keys."""
        with self._lock:
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for k in doomed:
                del self._entries[k]
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def cleanup(self) -> int:
        """Remove every entry that is stale right now. Returns the count removed."""
        with self._lock:
            now = self._clock()
            doomed = [k for k, e in self._entries.items() if self._is_stale(e, now)]
            for k in doomed:
                del self._entries[k]
        return len(doomed)

    def stats(self) -> CacheStats:
        """Raw population of the map, stale-but-unread entries included."""
        with self._lock:
            return CacheStats(size=len(self._entries), keys=list(self._entries))
