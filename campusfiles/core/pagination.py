"""Offset pagination for listing endpoints.

``has_more`` is inferred from a full page rather than a total count, so a
result set whose size is an exact multiple of the page size reports one
extra (empty) page.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 50


def page_offset(page: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Row offset of a 0-based ``page``."""
    if page < 0:
        raise ValueError(f"page must be >= 0, got {page}")
    if page_size <= 0:
        raise ValueError(f"page_size must be > 0, got {page_size}")
    return page * page_size


def has_more(returned: int, page_size: int = DEFAULT_PAGE_SIZE) -> bool:
    return returned == page_size


def previous_page(page: int) -> int:
    return max(0, page - 1)


class PageRequest(BaseModel):
    page: int = Field(default=0, ge=0)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.page_size)


class PageResult(BaseModel, Generic[T]):
    items: list[T]
    page: int
    page_size: int
    has_more: bool
    previous_page: int


def build_page(items: list[T], request: PageRequest) -> PageResult[T]:
    """Wrap one fetched page of at most ``request.page_size`` items."""
    return PageResult(
        items=items,
        page=request.page,
        page_size=request.page_size,
        has_more=has_more(len(items), request.page_size),
        previous_page=previous_page(request.page),
    )
