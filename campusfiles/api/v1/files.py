"""Academic file endpoints — paginated listing, recent feeds and publishing."""

import logging

from fastapi import APIRouter, HTTPException, Query, status
from sqlmodel import select

from campusfiles.api.deps import AppSettings, Cache, Session
from campusfiles.core.cache import MISSING, cache_key
from campusfiles.core.pagination import PageRequest, PageResult, build_page
from campusfiles.models.academic_file import AcademicFile, AcademicFileCreate, AcademicFileRead
from campusfiles.models.base import utcnow
from campusfiles.models.course import Course
from campusfiles.services.invalidation import FILE_WRITE_PREFIXES, invalidate_prefixes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])

MAX_FEED_LIMIT = 100


# ── Listings ──────────────────────────────────────────────────

@router.get("", response_model=PageResult[AcademicFileRead])
async def list_files(
    session: Session,
    cache: Cache,
    settings: AppSettings,
    page: int = Query(default=0, ge=0),
    course: str | None = None,
    semester: str | None = None,
    subject: str | None = None,
) -> PageResult[AcademicFileRead]:
    """One page of files, newest first, optionally filtered."""
    request = PageRequest(page=page, page_size=settings.page_size)
    key = cache_key("files", "page", page, course or "", semester or "", subject or "")
    cached = cache.get(key)
    if cached is not MISSING:
        return cached

    stmt = select(AcademicFile)
    if course:
        stmt = stmt.where(AcademicFile.course_name == course)
    if semester:
        stmt = stmt.where(AcademicFile.semester == semester)
    if subject:
        stmt = stmt.where(AcademicFile.subject == subject)
    stmt = (
        stmt
        .order_by(AcademicFile.created_at.desc(), AcademicFile.id.desc())  # type: ignore[union-attr]
        .offset(request.offset)
        .limit(request.page_size)
    )
    result = await session.execute(stmt)
    items = [AcademicFileRead.model_validate(f) for f in result.scalars().all()]

    data = build_page(items, request)
    cache.set(key, data, settings.cache_ttl_recent_files)
    return data


@router.get("/recent", response_model=list[AcademicFileRead])
async def recent_files(
    session: Session,
    cache: Cache,
    settings: AppSettings,
    limit: int = Query(default=10, ge=1),
) -> list[AcademicFileRead]:
    """Most recently published files across all courses."""
    limit = min(limit, MAX_FEED_LIMIT)
    key = cache_key("recentFiles", limit)
    cached = cache.get(key)
    if cached is not MISSING:
        return cached

    stmt = (
        select(AcademicFile)
        .order_by(AcademicFile.created_at.desc(), AcademicFile.id.desc())  # type: ignore[union-attr]
        .limit(limit)
    )
    result = await session.execute(stmt)
    data = [AcademicFileRead.model_validate(f) for f in result.scalars().all()]

    cache.set(key, data, settings.cache_ttl_recent_files)
    return data


@router.get("/by-course/{course_name}", response_model=list[AcademicFileRead])
async def course_files(
    course_name: str,
    session: Session,
    cache: Cache,
    settings: AppSettings,
    limit: int = Query(default=10, ge=1),
) -> list[AcademicFileRead]:
    """Most recent files published for a single course."""
    limit = min(limit, MAX_FEED_LIMIT)
    key = cache_key("courseFiles", course_name, limit)
    cached = cache.get(key)
    if cached is not MISSING:
        return cached

    stmt = (
        select(AcademicFile)
        .where(AcademicFile.course_name == course_name)
        .order_by(AcademicFile.created_at.desc(), AcademicFile.id.desc())  # type: ignore[union-attr]
        .limit(limit)
    )
    result = await session.execute(stmt)
    data = [AcademicFileRead.model_validate(f) for f in result.scalars().all()]

    cache.set(key, data, settings.cache_ttl_recent_files)
    return data


# ── Single file ───────────────────────────────────────────────

@router.get("/{file_id}", response_model=AcademicFileRead)
async def get_file(file_id: int, session: Session) -> AcademicFileRead:
    f = await _get_or_404(file_id, session)
    return AcademicFileRead.model_validate(f)


@router.post("", response_model=AcademicFileRead, status_code=status.HTTP_201_CREATED)
async def publish_file(
    body: AcademicFileCreate,
    session: Session,
    cache: Cache,
) -> AcademicFileRead:
    course = (await session.execute(
        select(Course).where(Course.name == body.course)
    )).scalar_one_or_none()
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    f = AcademicFile(
        title=body.title,
        author_name=body.author_name,
        course_id=course.id,
        course_name=course.name,
        semester=body.semester,
        subject=body.subject,
        last_update_message=body.last_update_message,
        description=body.description,
        file_name=body.file_name,
        file_type=body.file_type,
        file_content=body.file_content,
    )
    session.add(f)
    await session.commit()
    await session.refresh(f)

    invalidate_prefixes(cache, FILE_WRITE_PREFIXES)
    logger.info("Published file %s to course %s", f.id, course.name)
    return AcademicFileRead.model_validate(f)


@router.post("/{file_id}/download", response_model=AcademicFileRead)
async def register_download(
    file_id: int,
    session: Session,
    cache: Cache,
) -> AcademicFileRead:
    f = await _get_or_404(file_id, session)
    f.downloads += 1
    f.updated_at = utcnow()
    session.add(f)
    await session.commit()
    await session.refresh(f)

    invalidate_prefixes(cache, FILE_WRITE_PREFIXES)
    return AcademicFileRead.model_validate(f)


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(
    file_id: int,
    session: Session,
    cache: Cache,
) -> None:
    f = await _get_or_404(file_id, session)
    await session.delete(f)
    await session.commit()

    invalidate_prefixes(cache, FILE_WRITE_PREFIXES)


# ── Internal helper ───────────────────────────────────────────

async def _get_or_404(file_id: int, session) -> AcademicFile:
    f = await session.get(AcademicFile, file_id)
    if f is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return f
