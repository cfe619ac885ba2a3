from __future__ import annotations

from enum import Enum


class SortDirection(str, Enum):
    """Sort order for paged listings."""

    ASC = "asc"
    DESC = "desc"
