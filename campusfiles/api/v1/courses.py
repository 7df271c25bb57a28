"""Course CRUD — listings are served read-through from the response cache."""

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import func
from sqlmodel import select

from campusfiles.api.deps import AppSettings, Cache, Session
from campusfiles.core.cache import MISSING, cache_key
from campusfiles.models.academic_file import AcademicFile
from campusfiles.models.base import utcnow
from campusfiles.models.course import (
    Course,
    CourseCreate,
    CourseRead,
    CourseUpdate,
    CourseWithStats,
)
from campusfiles.services.invalidation import COURSE_WRITE_PREFIXES, invalidate_prefixes

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=list[CourseRead])
async def list_courses(
    session: Session,
    cache: Cache,
    settings: AppSettings,
) -> list[CourseRead]:
    """All courses ordered by name."""
    key = cache_key("courses", "all")
    cached = cache.get(key)
    if cached is not MISSING:
        return cached

    result = await session.execute(select(Course).order_by(Course.name))
    courses = [CourseRead.model_validate(c) for c in result.scalars().all()]

    cache.set(key, courses, settings.cache_ttl_courses)
    return courses


@router.get("/stats", response_model=list[CourseWithStats])
async def list_courses_with_stats(
    session: Session,
    cache: Cache,
    settings: AppSettings,
) -> list[CourseWithStats]:
    """Courses with their file count and total downloads."""
    key = cache_key("courses", "withStats")
    cached = cache.get(key)
    if cached is not MISSING:
        return cached

    stmt = (
        select(
            Course.id,
            Course.name,
            Course.description,
            func.count(AcademicFile.id),
            func.coalesce(func.sum(AcademicFile.downloads), 0),
        )
        .select_from(Course)
        .outerjoin(AcademicFile, AcademicFile.course_id == Course.id)
        .group_by(Course.id, Course.name, Course.description)
        .order_by(Course.name)
    )
    rows = (await session.execute(stmt)).all()
    data = [
        CourseWithStats(
            id=row[0],
            name=row[1],
            description=row[2],
            file_count=row[3],
            total_downloads=row[4],
        )
        for row in rows
    ]

    cache.set(key, data, settings.cache_ttl_courses)
    return data


@router.get("/{course_id}", response_model=CourseRead)
async def get_course(course_id: int, session: Session) -> CourseRead:
    course = await _get_or_404(course_id, session)
    return CourseRead.model_validate(course)


@router.post("", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
async def create_course(
    body: CourseCreate,
    session: Session,
    cache: Cache,
) -> CourseRead:
    await _ensure_name_free(body.name, session)

    course = Course(name=body.name, description=body.description)
    session.add(course)
    await session.commit()
    await session.refresh(course)

    invalidate_prefixes(cache, COURSE_WRITE_PREFIXES)
    return CourseRead.model_validate(course)


@router.patch("/{course_id}", response_model=CourseRead)
async def update_course(
    course_id: int,
    body: CourseUpdate,
    session: Session,
    cache: Cache,
) -> CourseRead:
    course = await _get_or_404(course_id, session)
    update_data = body.model_dump(exclude_unset=True, exclude_none=True)

    new_name = update_data.get("name")
    if new_name is not None and new_name != course.name:
        await _ensure_name_free(new_name, session)
        # Keep the denormalised name on published files in step
        files = (await session.execute(
            select(AcademicFile).where(AcademicFile.course_id == course.id)
        )).scalars().all()
        for f in files:
            f.course_name = new_name
            session.add(f)

    for field, value in update_data.items():
        setattr(course, field, value)

    course.updated_at = utcnow()
    session.add(course)
    await session.commit()
    await session.refresh(course)

    invalidate_prefixes(cache, COURSE_WRITE_PREFIXES)
    return CourseRead.model_validate(course)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: int,
    session: Session,
    cache: Cache,
) -> None:
    course = await _get_or_404(course_id, session)

    file_count = (await session.execute(
        select(func.count()).select_from(AcademicFile).where(AcademicFile.course_id == course.id)
    )).scalar_one()
    if file_count:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Course still has {file_count} published files",
        )

    await session.delete(course)
    await session.commit()

    invalidate_prefixes(cache, COURSE_WRITE_PREFIXES)


# ── Internal helpers ──────────────────────────────────────────

async def _get_or_404(course_id: int, session) -> Course:
    course = await session.get(Course, course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


async def _ensure_name_free(name: str, session) -> None:
    existing = (await session.execute(
        select(Course.id).where(Course.name == name)
    )).scalar_one_or_none()
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A course with this name already exists",
        )
