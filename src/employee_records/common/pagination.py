from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from ..core.enums import SortDirection

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index, page size and ordering for a paged query.

    `sort_by` is already a whitelisted column name (see validators.parse_page_request).
    """

    page: int
    size: int
    sort_by: str = "id"
    direction: SortDirection = SortDirection.ASC

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    page: int
    size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_items / self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def metadata(self) -> dict:
        return {
            "page": self.page,
            "size": self.size,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrevious": self.has_previous,
        }
