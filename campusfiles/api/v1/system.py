"""Operational endpoints for the response cache."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from campusfiles.api.deps import Cache
from campusfiles.workers.cleanup import sweep_cache

router = APIRouter(prefix="/system", tags=["system"])


class CacheStatsResponse(BaseModel):
    size: int  # raw entry count, expired-but-unread included
    keys: list[str]


class CleanupResponse(BaseModel):
    removed: int
    remaining: int


@router.get("/cache", response_model=CacheStatsResponse)
async def cache_stats(cache: Cache) -> CacheStatsResponse:
    stats = cache.stats()
    return CacheStatsResponse(size=stats.size, keys=sorted(stats.keys))


@router.post("/cache/cleanup", response_model=CleanupResponse)
async def cache_cleanup(cache: Cache) -> CleanupResponse:
    """Sweep expired entries now instead of waiting for the worker."""
    return CleanupResponse(**sweep_cache(cache))


@router.delete("/cache", status_code=status.HTTP_204_NO_CONTENT)
async def cache_clear(cache: Cache) -> None:
    cache.clear()
