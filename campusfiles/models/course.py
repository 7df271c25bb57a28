"""Course model — a degree programme files are published under."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from campusfiles.models.base import TimestampMixin


class Course(TimestampMixin, SQLModel, table=True):
    __tablename__ = "courses"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, nullable=False, unique=True, index=True)
    description: str = Field(default="", max_length=2000)


# ── Pydantic schemas ─────────────────────────────────────────

class CourseCreate(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", max_length=2000)


class CourseUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


class CourseRead(SQLModel):
    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


class CourseWithStats(SQLModel):
    id: int
    name: str
    description: str
    file_count: int
    total_downloads: int
