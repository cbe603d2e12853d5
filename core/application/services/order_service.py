"""Application service for Order operations."""

import logging
from decimal import Decimal
from typing import Optional

from core.data.uow import UnitOfWorkFactory
from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.exceptions import ConcurrencyConflictError, OrderNotFoundError
from core.domain.value_objects import Page, PageRequest

logger = logging.getLogger(__name__)


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Enforce the order lifecycle (CREATED -> CANCELLED, cancel is idempotent)
    - Run every operation inside its own unit of work
    - Resolve version conflicts on cancel by re-reading the order
    """

    def __init__(self, uow_factory: UnitOfWorkFactory, cancel_max_attempts: int = 2) -> None:
        """Initialize order application service.

        Args:
            uow_factory: Callable returning a fresh unit of work
            cancel_max_attempts: Read-modify-write attempts per cancel
        """
        if cancel_max_attempts < 1:
            raise ValueError("cancel_max_attempts must be at least 1")

        self._uow_factory = uow_factory
        self._cancel_max_attempts = cancel_max_attempts

    async def create_order(self, total_amount: Decimal) -> Order:
        """Create a new order in status CREATED.

        Args:
            total_amount: Positive order total

        Returns:
            Stored order with generated id and timestamps

        Raises:
            InvalidOrderAmountError: If the amount is not positive
        """
        order = Order.create(total_amount)

        async with self._uow_factory() as uow:
            created = await uow.orders.add(order)
            await uow.commit()

        logger.info(f"Order {created.id} created (total_amount={created.total_amount})")
        return created

    async def get_order(self, order_id: int) -> Order:
        """Get order by ID.

        Raises:
            OrderNotFoundError: If no order has this id
        """
        async with self._uow_factory() as uow:
            order = await uow.orders.find_by_id(order_id)

        if order is None:
            raise OrderNotFoundError(order_id)

        return order

    async def cancel_order(self, order_id: int) -> Order:
        """Cancel an order; cancelling a cancelled order is a no-op.

        A concurrent write between read and update surfaces as a version
        conflict. The order is then re-read and the decision re-made, up to
        `cancel_max_attempts` times in total.

        Raises:
            OrderNotFoundError: If no order has this id
            ConcurrencyConflictError: If every attempt lost a version race
        """
        attempt = 1
        while True:
            try:
                return await self._cancel_once(order_id)
            except ConcurrencyConflictError:
                if attempt >= self._cancel_max_attempts:
                    logger.error(
                        f"Giving up cancelling order {order_id} after {attempt} attempt(s)"
                    )
                    raise
                logger.info(f"Order {order_id} changed while cancelling, re-reading")
                attempt += 1

    async def _cancel_once(self, order_id: int) -> Order:
        async with self._uow_factory() as uow:
            order = await uow.orders.find_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            expected_version = order.version
            if not order.cancel():
                logger.info(f"Order {order_id} already cancelled")
                return order

            cancelled = await uow.orders.update_status(order, expected_version)
            await uow.commit()

        logger.info(f"Order {order_id} cancelled (version {cancelled.version})")
        return cancelled

    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        page_request: Optional[PageRequest] = None,
    ) -> Page[Order]:
        """List orders with optional status filter.

        Args:
            status: Only orders in this status; None for all
            page_request: Defaults to page 0, size 20, sorted by id ascending

        Returns:
            Page of orders
        """
        page_request = page_request or PageRequest()

        async with self._uow_factory() as uow:
            return await uow.orders.find_page(status, page_request)
