"""Import all models so SQLModel.metadata picks them up."""

from campusfiles.models.academic_file import AcademicFile, AcademicFileCreate, AcademicFileRead
from campusfiles.models.course import (
    Course,
    CourseCreate,
    CourseRead,
    CourseUpdate,
    CourseWithStats,
)

__all__ = [
    "AcademicFile",
    "AcademicFileCreate",
    "AcademicFileRead",
    "Course",
    "CourseCreate",
    "CourseRead",
    "CourseUpdate",
    "CourseWithStats",
]
