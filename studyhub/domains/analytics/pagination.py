# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pagination of the study log listing.

Pages are 1-based. An out-of-range page is not clamped: it yields an empty
slice and the caller decides what to show.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageRequest(BaseModel):
    """Requested page of the study log listing."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)


@dataclass(frozen=True)
class PaginationInfo:
    """Page position and totals."""

    page: int
    page_size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "page": self.page,
            "page_size": self.page_size,
            "total_items": self.total_items,
            "total_pages": self.total_pages,
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    """A slice of items plus its pagination info."""

    pagination: PaginationInfo
    items: list[T] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        return self.pagination.total_items

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages


def page_bounds(page: int, page_size: int) -> tuple[int, int]:
    """Inclusive row offsets of a page, as used by range queries.

    Example:
        >>> page_bounds(2, 10)
        (10, 19)
    """
    start = (page - 1) * page_size
    return start, start + page_size - 1


def build_pagination(page: int, page_size: int, total_items: int | None) -> PaginationInfo:
    """Describe a page whose slice was applied by the datastore."""
    return PaginationInfo(page=page, page_size=page_size, total_items=total_items or 0)


def paginate_logs(entries: Sequence[T] | None, page: int, page_size: int) -> Page[T]:
    """Slice an in-memory listing into one page.

    Args:
        entries: Full, already ordered listing.
        page: 1-based page number.
        page_size: Items per page.

    Returns:
        Page with the slice (empty when page is past the end).
    """
    entries = entries or []
    start, end = page_bounds(page, page_size)
    return Page(
        pagination=build_pagination(page, page_size, len(entries)),
        items=list(entries[start : end + 1]),
    )
