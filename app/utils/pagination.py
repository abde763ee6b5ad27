"""Pagination helpers"""
from typing import Optional

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


def coerce_positive_int(value: Optional[str], default: int) -> int:
    """Parse a query value as a positive integer, falling back to the default."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def total_pages(total: int, page_size: int) -> int:
    return (total + page_size - 1) // page_size
