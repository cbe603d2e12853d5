"""Domain layer - pure domain models and interfaces."""

from .entities import Order
from .enums import OrderStatus
from .exceptions import (
    ConcurrencyConflictError,
    DomainException,
    EntityNotFoundError,
    InvalidOrderAmountError,
    OrderNotFoundError,
    ValidationError,
)
from .repositories import OrderRepository
from .value_objects import Page, PageRequest, SortDirection, SortOrder

__all__ = [
    "ConcurrencyConflictError",
    "DomainException",
    "EntityNotFoundError",
    "InvalidOrderAmountError",
    "Order",
    "OrderNotFoundError",
    "OrderRepository",
    "OrderStatus",
    "Page",
    "PageRequest",
    "SortDirection",
    "SortOrder",
    "ValidationError",
]
