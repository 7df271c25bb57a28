"""AcademicFile model — a document published for a course."""

from datetime import datetime

from sqlalchemy import Text
from sqlmodel import Column, Field, SQLModel

from campusfiles.models.base import TimestampMixin


class AcademicFile(TimestampMixin, SQLModel, table=True):
    __tablename__ = "academic_files"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=255, nullable=False)
    author_name: str = Field(max_length=255, nullable=False)

    # course_name is denormalised so listings filter without a join
    course_id: int = Field(foreign_key="courses.id", nullable=False, index=True)
    course_name: str = Field(max_length=255, nullable=False, index=True)

    semester: str = Field(max_length=50, nullable=False)
    subject: str = Field(max_length=255, nullable=False)
    last_update_message: str = Field(default="", max_length=1000)
    description: str | None = Field(default=None, max_length=2000)

    file_name: str | None = Field(default=None, max_length=255)
    file_type: str | None = Field(default=None, max_length=100)
    file_content: str | None = Field(default=None, sa_column=Column(Text))

    downloads: int = Field(default=0)


# ── Pydantic schemas ─────────────────────────────────────────

class AcademicFileCreate(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    author_name: str = Field(min_length=1, max_length=255)
    course: str
    semester: str = Field(max_length=50)
    subject: str = Field(max_length=255)
    last_update_message: str = Field(default="", max_length=1000)
    description: str | None = None
    file_name: str | None = None
    file_type: str | None = None
    file_content: str | None = None


class AcademicFileRead(SQLModel):
    id: int
    title: str
    author_name: str
    course_id: int
    course_name: str
    semester: str
    subject: str
    last_update_message: str
    description: str | None
    file_name: str | None
    file_type: str | None
    downloads: int
    created_at: datetime
