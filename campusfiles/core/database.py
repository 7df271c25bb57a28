"""Async database engine and session factory.

The database is the remote store the response cache sits in front of.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from campusfiles.core.config import Settings, get_settings


def engine_options(settings: Settings) -> dict:
    """Keyword arguments for ``create_async_engine`` derived from settings."""
    options: dict = {"echo": settings.database_echo}
    # SQLite (local dev, tests) runs without a connection pool to size
    if not settings.database_url.startswith("sqlite"):
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
        options["pool_pre_ping"] = True
    return options


settings = get_settings()

engine = create_async_engine(settings.database_url, **engine_options(settings))

async_session_factory = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency; one session per request, shared by every cache miss it serves."""
    async with async_session_factory() as session:
        yield session


async def init_db() -> None:
    """Create the courses and academic_files tables if missing."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def dispose_db() -> None:
    await engine.dispose()
