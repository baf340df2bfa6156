"""Offset pagination helper shared by list use cases.

``page_index`` is zero based: page ``n`` skips ``n * page_size`` rows and
takes the next ``page_size``.  ``total_count`` is always computed over the
unpaginated source, so it stays stable while a client walks the pages.
"""

from __future__ import annotations

from typing import Any, Protocol

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class Pageable(Protocol):
    """Anything that can be counted asynchronously and sliced lazily."""

    async def acount(self) -> int: ...

    def __getitem__(self, key: slice) -> Any: ...


def _default_page_size() -> int:
    return settings.DEFAULT_PAGE_SIZE


class BasePaginatedRequest(BaseModel):
    """Base DTO for any request that asks for one page of results."""

    model_config = ConfigDict(frozen=True)

    page_size: int = Field(default_factory=_default_page_size)
    page_index: int = 0

    @field_validator("page_size")
    @classmethod
    def page_size_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Page size must be at least 1.")
        return v

    @field_validator("page_index")
    @classmethod
    def page_index_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Page index cannot be negative.")
        return v


class PaginatedResult(BaseModel):
    """Page envelope: the current page plus paging metadata.

    ``items`` starts out as a lazy sliced source; callers replace it with
    the materialized list once they have consumed the page.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: Any
    total_count: int
    page_size: int
    page_index: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return -(-self.total_count // self.page_size)


async def build_paginated_result(
    source: Pageable, page_size: int, page_index: int
) -> PaginatedResult:
    """Count ``source`` and slice out the requested page (not materialized)."""
    total_count = await source.acount()
    skip = page_index * page_size

    return PaginatedResult(
        items=source[skip : skip + page_size],
        total_count=total_count,
        page_size=page_size,
        page_index=page_index,
    )
