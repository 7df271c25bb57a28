"""FastAPI application entrypoint."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campusfiles.api.v1 import v1_router
from campusfiles.core.cache import CacheStore
from campusfiles.core.config import get_settings
from campusfiles.core.database import dispose_db, init_db
from campusfiles.workers.cleanup import start_cache_cleanup, stop_cache_cleanup

_settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup: ensure tables exist (use Alembic in production)
    await init_db()
    cleanup_task = start_cache_cleanup(
        app.state.cache, _settings.cache_cleanup_interval_seconds,
    )
    yield
    # Shutdown
    await stop_cache_cleanup(cleanup_task)
    await dispose_db()


app = FastAPI(
    title="CampusFiles",
    version="0.1.0",
    description="Academic file repository with a read-through response cache",
    lifespan=lifespan,
)

# One cache per application instance; routes reach it via api.deps.get_cache
app.state.cache = CacheStore()

# ── CORS ─────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _settings.allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── API routes ───────────────────────────────────────────────
app.include_router(v1_router)


@app.get("/health", tags=["system"])
async def health_check() -> dict:
    return {"status": "ok"}
