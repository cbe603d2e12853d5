"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..enums import OrderStatus
from ..exceptions import InvalidOrderAmountError

# Properties an order listing may be sorted by.
SORTABLE_PROPERTIES = ("id", "status", "total_amount", "created_at", "updated_at")


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """
    Order aggregate root.

    `id`, `created_at` and `updated_at` are assigned by the store on first
    persistence. `version` is the optimistic-concurrency counter and is never
    exposed outside the service boundary.
    """
    total_amount: Decimal
    status: OrderStatus = OrderStatus.CREATED
    id: Optional[int] = None
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(cls, total_amount: Decimal) -> "Order":
        """Factory for a new, not yet persisted order.

        Raises:
            InvalidOrderAmountError: If the amount is missing, not a number,
                or not strictly positive.
        """
        if total_amount is None:
            raise InvalidOrderAmountError(total_amount)

        try:
            amount = total_amount if isinstance(total_amount, Decimal) else Decimal(str(total_amount))
        except (InvalidOperation, ValueError):
            raise InvalidOrderAmountError(total_amount)

        if not amount.is_finite() or amount <= 0:
            raise InvalidOrderAmountError(total_amount)

        return cls(total_amount=amount, status=OrderStatus.CREATED)

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED

    def cancel(self) -> bool:
        """Business rule: transition to CANCELLED.

        Returns:
            True if the status changed, False if the order was already
            cancelled (idempotent no-op).
        """
        if self.is_cancelled:
            return False

        self.status = OrderStatus.CANCELLED
        return True

    def copy(self) -> "Order":
        """Detached copy, used by stores that hand out snapshots."""
        return replace(self)
