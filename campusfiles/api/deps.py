"""FastAPI dependencies shared by the v1 routers."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from campusfiles.core.cache import CacheStore
from campusfiles.core.config import Settings, get_settings
from campusfiles.core.database import get_session


def get_cache(request: Request) -> CacheStore:
    """The response cache owned by the running application."""
    return request.app.state.cache


# Typed shorthand for use in route signatures
Session = Annotated[AsyncSession, Depends(get_session)]
Cache = Annotated[CacheStore, Depends(get_cache)]
AppSettings = Annotated[Settings, Depends(get_settings)]
