"""Repository implementations."""

from .memory_order_repository import InMemoryOrderRepository, InMemoryOrderStore
from .order_repository_impl import SqlAlchemyOrderRepository

__all__ = [
    "InMemoryOrderRepository",
    "InMemoryOrderStore",
    "SqlAlchemyOrderRepository",
]
