"""Drop cached reads that a successful write made stale.

Each write kind maps to the key prefixes whose cached results it can
change. Routes call :func:`invalidate_prefixes` after ``session.commit()``
so a failed write never evicts anything.
"""

import logging
from collections.abc import Iterable

from campusfiles.core.cache import CacheStore

logger = logging.getLogger(__name__)

COURSE_WRITE_PREFIXES: tuple[str, ...] = (
    "courses:",
    "courseFiles:",
    "files:",
    "dashboard:",
)

FILE_WRITE_PREFIXES: tuple[str, ...] = (
    "files:",
    "recentFiles:",
    "courseFiles:",
    "courses:withStats",
    "dashboard:",
)


def invalidate_prefixes(cache: CacheStore, prefixes: Iterable[str]) -> int:
    """Invalidate every prefix in turn; returns the total number of keys removed."""
    removed = 0
    for prefix in prefixes:
        n = cache.invalidate_by_prefix(prefix)
        if n:
            logger.debug("Invalidated %d cache keys under %r", n, prefix)
        removed += n
    return removed
