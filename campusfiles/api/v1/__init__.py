"""V1 API router aggregation."""

from fastapi import APIRouter

from campusfiles.api.v1.courses import router as courses_router
from campusfiles.api.v1.dashboard import router as dashboard_router
from campusfiles.api.v1.files import router as files_router
from campusfiles.api.v1.system import router as system_router

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(courses_router)
v1_router.include_router(files_router)
v1_router.include_router(dashboard_router)
v1_router.include_router(system_router)
