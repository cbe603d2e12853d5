"""Static mappers for domain entities ↔ database models."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus

from .models.order_model import OrderModel


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo on the way back; stored values are always UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate.

        Args:
            model: OrderModel instance

        Returns:
            Order domain aggregate
        """
        return Order(
            id=model.id,
            version=model.version,
            status=OrderStatus(model.status),
            total_amount=Decimal(str(model.total_amount)),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert domain aggregate to ORM model.

        Args:
            entity: Order domain aggregate

        Returns:
            OrderModel instance
        """
        return OrderModel(
            id=entity.id,
            version=entity.version,
            status=entity.status.value,
            total_amount=entity.total_amount,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
