"""Pagination value objects - pure Python immutable types."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Tuple, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20

# Largest row offset a 64-bit database column type can address.
MAX_OFFSET = 2**63 - 1

# Property used as the final ordering key so pages are stable across calls.
TIE_BREAK_PROPERTY = "id"


class SortDirection(str, Enum):
    """Sort direction for a single property."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class SortOrder:
    """Ordering on a single entity property."""

    property: str
    direction: SortDirection = SortDirection.ASC

    @property
    def ascending(self) -> bool:
        return self.direction == SortDirection.ASC


@dataclass(frozen=True)
class PageRequest:
    """
    Zero-based page request.

    The tie-break ordering on `id` ascending is appended to `sort` unless the
    caller already orders by `id`.
    """

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: Tuple[SortOrder, ...] = (SortOrder(TIE_BREAK_PROPERTY),)

    def __post_init__(self):
        if self.page < 0:
            raise ValueError(f"Page index must not be negative, got: {self.page}")
        if self.size < 1:
            raise ValueError(f"Page size must be at least 1, got: {self.size}")
        if self.page * self.size > MAX_OFFSET:
            raise ValueError(f"Page {self.page} of size {self.size} is out of range")

        sort = tuple(self.sort)
        if not any(order.property == TIE_BREAK_PROPERTY for order in sort):
            sort = sort + (SortOrder(TIE_BREAK_PROPERTY),)
        object.__setattr__(self, "sort", sort)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a sorted result set plus the total element count."""

    content: List[T]
    request: PageRequest
    total_elements: int

    @property
    def number(self) -> int:
        return self.request.page

    @property
    def size(self) -> int:
        return self.request.size

    @property
    def sort(self) -> Tuple[SortOrder, ...]:
        return self.request.sort

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.total_elements else 0

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def is_first(self) -> bool:
        return self.number == 0

    @property
    def is_last(self) -> bool:
        return self.number + 1 >= self.total_pages

    def map(self, fn) -> "Page":
        """Return a page with `fn` applied to every element."""
        return Page(
            content=[fn(item) for item in self.content],
            request=self.request,
            total_elements=self.total_elements,
        )
