"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.order import Order
from ..enums import OrderStatus
from ..value_objects import Page, PageRequest


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Insert a new order.

        Args:
            order: Order without an id

        Returns:
            The stored order with generated id, version and timestamps
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: int) -> Optional[Order]:
        """Retrieve order by unique identifier.

        Args:
            order_id: Order id

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_status(self, order: Order, expected_version: int) -> Order:
        """Write `order.status` if the stored version still matches.

        The version is incremented and `updated_at` refreshed in the same
        statement.

        Args:
            order: Order carrying the new status
            expected_version: Version the caller read

        Returns:
            The updated order

        Raises:
            ConcurrencyConflictError: If the stored version differs
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        status: Optional[OrderStatus],
        page_request: PageRequest,
    ) -> Page[Order]:
        """List orders, optionally filtered by status, one page at a time.

        Args:
            status: Only return orders in this status; None for all
            page_request: Page index, size and ordering

        Returns:
            Page of Order aggregates
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every order. Test cleanup only.

        Returns:
            Number of removed orders
        """
        pass
