"""Dashboard summary endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import func
from sqlmodel import select

from campusfiles.api.deps import AppSettings, Cache, Session
from campusfiles.core.cache import MISSING, cache_key
from campusfiles.models.academic_file import AcademicFile
from campusfiles.models.course import Course

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class DashboardStats(BaseModel):
    total_files: int
    total_courses: int
    total_downloads: int


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    session: Session,
    cache: Cache,
    settings: AppSettings,
) -> DashboardStats:
    """Aggregate counts across the whole repository."""
    key = cache_key("dashboard", "admin")
    cached = cache.get(key)
    if cached is not MISSING:
        return cached

    file_totals = (await session.execute(
        select(
            func.count(AcademicFile.id),
            func.coalesce(func.sum(AcademicFile.downloads), 0),
        )
    )).one()

    course_count = (await session.execute(
        select(func.count()).select_from(Course)
    )).scalar_one()

    result = DashboardStats(
        total_files=file_totals[0],
        total_courses=course_count,
        total_downloads=file_totals[1],
    )
    cache.set(key, result, settings.cache_ttl_dashboard_stats)
    return result
