"""Pagination schemas for page-number pagination."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginationMetadata(BaseModel):
    """Position of a page within the full result set."""

    page: int = Field(description="Current page number (1-based).")
    page_size: int = Field(description="Maximum number of items per page.")
    total_items: int = Field(description="Number of items matching the filters.")
    total_pages: int = Field(description="Number of pages; 0 when nothing matches.")

    @classmethod
    def build(cls, page: int, page_size: int, total_items: int) -> "PaginationMetadata":
        return cls(
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages(total_items, page_size),
        )


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response.

    A page past the end is not an error: it comes back with no items and
    the same pagination totals.
    """

    items: list[T]
    pagination: PaginationMetadata


def total_pages(total_items: int, page_size: int) -> int:
    """ceil(total_items / page_size), or 0 when there are no items."""
    if total_items <= 0:
        return 0
    return math.ceil(total_items / page_size)
