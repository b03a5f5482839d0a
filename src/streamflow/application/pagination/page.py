"""Application pagination – PageRequest and Page.

Pages are zero-based: ``PageRequest(page=0, size=2)`` addresses the two
newest items of a timestamp-descending listing.
"""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Callable, Generic, TypeVar

from streamflow.kernel.errors import ValidationError

T = TypeVar("T")

MAX_PAGE_SIZE = 1000


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters."""

    page: int = 0
    size: int = 10

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValidationError.for_field("page", "must be >= 0", self.page)
        if self.size < 1 or self.size > MAX_PAGE_SIZE:
            raise ValidationError.for_field("size", f"must be between 1 and {MAX_PAGE_SIZE}", self.size)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclasses.dataclass
class Page(Generic[T]):
    """Offset-based page of results with computed navigation properties."""

    items: list[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0 or self.total <= 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def map(self, fn: Callable[[T], Any]) -> "Page[Any]":
        """Return a new :class:`Page` with each item transformed by *fn*."""
        return Page(items=[fn(item) for item in self.items], total=self.total, page=self.page, size=self.size)

    def to_dict(self, item_fn: Callable[[T], Any] = lambda item: item) -> dict[str, Any]:
        return {
            "items": [item_fn(item) for item in self.items],
            "total": self.total,
            "page": self.page,
            "size": self.size,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
        }

    @classmethod
    def of(cls, all_items: list[T], request: PageRequest) -> "Page[T]":
        """Build a :class:`Page` by slicing an already ordered *all_items*."""
        start = request.offset
        return cls(
            items=all_items[start:start + request.size],
            total=len(all_items),
            page=request.page,
            size=request.size,
        )


__all__ = ["MAX_PAGE_SIZE", "Page", "PageRequest"]
