"""Data layer - infrastructure persistence and mapping."""

from .mappers import OrderMapper
from .models import Base, OrderModel
from .repositories import InMemoryOrderRepository, InMemoryOrderStore, SqlAlchemyOrderRepository
from .uow import (
    AbstractUnitOfWork,
    InMemoryUnitOfWork,
    UnitOfWork,
    UnitOfWorkFactory,
    create_uow,
)

__all__ = [
    "AbstractUnitOfWork",
    "Base",
    "create_uow",
    "InMemoryOrderRepository",
    "InMemoryOrderStore",
    "InMemoryUnitOfWork",
    "OrderMapper",
    "OrderModel",
    "SqlAlchemyOrderRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
