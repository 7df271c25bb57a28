"""Periodic job — sweep expired entries out of the response cache.

``CacheStore.get`` only evicts the keys it is asked for, so keys written
once and never read again would otherwise stay in memory forever.
"""

from __future__ import annotations

import asyncio
import logging

from campusfiles.core.cache import CacheStore

logger = logging.getLogger(__name__)


def sweep_cache(cache: CacheStore) -> dict:
    """Run one cleanup pass and report what it did."""
    removed = cache.cleanup()
    remaining = len(cache)
    if removed:
        logger.info("Cache cleanup: removed %d expired entries, %d remain", removed, remaining)
    return {"removed": removed, "remaining": remaining}


async def run_cache_cleanup(cache: CacheStore, interval: float) -> None:
    """Sweep ``cache`` every ``interval`` seconds until cancelled."""
    logger.info("Cache cleanup worker started (every %ss)", interval)
    try:
        while True:
            await asyncio.sleep(interval)
            try:
                sweep_cache(cache)
            except Exception:
                logger.exception("Cache cleanup pass failed")
    except asyncio.CancelledError:
        logger.info("Cache cleanup worker stopped")
        raise


def start_cache_cleanup(cache: CacheStore, interval: float) -> asyncio.Task | None:
    """Schedule the sweeper on the running loop; ``interval <= 0`` disables it."""
    if interval <= 0:
        logger.info("Cache cleanup worker disabled")
        return None
    return asyncio.create_task(run_cache_cleanup(cache, interval), name="cache-cleanup")


async def stop_cache_cleanup(task: asyncio.Task | None) -> None:
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
