"""
Query shaping for the movie listing and search endpoints.

Translates the public sort/pagination parameters into storage terms and
wraps a slice of results with its pagination envelope.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Tuple

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 12

# SQLite binds LIMIT and OFFSET as signed 64-bit integers
MAX_ROW_INDEX = 2**63 - 1

DEFAULT_SORT_FIELD = "createdAt"

# Public sort field -> Movie attribute
SORT_FIELDS = {
    "name": "title",
    "rating": "rating",
    "releaseDate": "release_date",
    "duration": "duration",
    "createdAt": "created_at",
}

LIKE_ESCAPE = "\\"


def resolve_sort(sort_by: str | None, sort_order: str | None) -> Tuple[str, bool]:
    """
    Resolve public sort parameters to a Movie attribute name and direction.

    Unknown fields fall back to createdAt. Only 'asc' sorts ascending;
    anything else, including None, sorts descending.

    Returns:
        (attribute_name, descending)
    """
    attribute = SORT_FIELDS.get(sort_by or DEFAULT_SORT_FIELD, SORT_FIELDS[DEFAULT_SORT_FIELD])
    descending = sort_order != "asc"
    return attribute, descending


def page_offset(page: int, page_size: int) -> int:
    """Number of records to skip before the given 1-based page."""
    if page < 1:
        raise ValueError("Page must be at least 1")
    if page_size < 1:
        raise ValueError("Page size must be at least 1")
    if page * page_size > MAX_ROW_INDEX:
        raise ValueError("Page is out of range")
    return (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    """Ceiling of total / page_size."""
    return math.ceil(total / page_size)


def contains_pattern(query: str) -> str:
    """
    Build a LIKE pattern matching `query` as a literal substring.

    Wildcards in the query are escaped with LIKE_ESCAPE so user input
    can't widen the match.
    """
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


@dataclass
class Page:
    """A slice of results plus the totals needed to page through them."""

    items: List[Any] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def pages(self) -> int:
        return total_pages(self.total, self.page_size)
