"""Domain entities."""

from .order import SORTABLE_PROPERTIES, Order, utcnow

__all__ = ["Order", "SORTABLE_PROPERTIES", "utcnow"]
