"""Domain value objects."""

from .pagination import (
    DEFAULT_PAGE_SIZE,
    Page,
    PageRequest,
    SortDirection,
    SortOrder,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Page",
    "PageRequest",
    "SortDirection",
    "SortOrder",
]
