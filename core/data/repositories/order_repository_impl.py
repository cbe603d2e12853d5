"""SQLAlchemy implementation of OrderRepository."""

import logging
from dataclasses import replace
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.order import Order, utcnow
from core.domain.enums import OrderStatus
from core.domain.exceptions import ConcurrencyConflictError, ValidationError
from core.domain.repositories.order_repository import OrderRepository
from core.domain.value_objects import Page, PageRequest

from ..mappers import OrderMapper
from ..models.order_model import OrderModel

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "id": OrderModel.id,
    "status": OrderModel.status,
    "total_amount": OrderModel.total_amount,
    "created_at": OrderModel.created_at,
    "updated_at": OrderModel.updated_at,
}


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def add(self, order: Order) -> Order:
        """Insert a new order and flush to obtain its generated id.

        Args:
            order: Order domain aggregate without id

        Returns:
            Stored order with id, version 0 and timestamps
        """
        now = utcnow()
        model = OrderMapper.to_persistence(
            replace(order, id=None, version=0, created_at=now, updated_at=now)
        )
        self._session.add(model)

        await self._session.flush()  # Propagate to DB without committing

        logger.info(f"Inserted order {model.id} (total_amount={order.total_amount})")
        return OrderMapper.to_domain(model)

    async def find_by_id(self, order_id: int) -> Optional[Order]:
        """Retrieve order by unique identifier.

        Args:
            order_id: Order id

        Returns:
            Order if found, None otherwise
        """
        result = await self._session.execute(
            select(OrderModel).where(OrderModel.id == order_id)
        )
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def update_status(self, order: Order, expected_version: int) -> Order:
        """Compare-and-swap status write guarded by `version`.

        Args:
            order: Order carrying the new status
            expected_version: Version the caller read

        Returns:
            Updated order with incremented version

        Raises:
            ConcurrencyConflictError: If no row matched id and version
        """
        now = utcnow()
        result = await self._session.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order.id,
                OrderModel.version == expected_version,
            )
            .values(
                status=order.status.value,
                version=OrderModel.version + 1,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )

        if result.rowcount != 1:
            logger.warning(
                f"Version check failed for order {order.id} "
                f"(expected version {expected_version})"
            )
            raise ConcurrencyConflictError(order.id, expected_version)

        # Loaded instances no longer match the row; reload on next access
        self._session.expire_all()

        return replace(order, version=expected_version + 1, updated_at=now)

    async def find_page(
        self,
        status: Optional[OrderStatus],
        page_request: PageRequest,
    ) -> Page[Order]:
        """List orders with optional status filter, ordering and paging.

        Args:
            status: Status filter, or None for all orders
            page_request: Page index, size and ordering

        Returns:
            Page of Order aggregates
        """
        query = select(OrderModel)
        count_query = select(func.count()).select_from(OrderModel)

        if status is not None:
            query = query.where(OrderModel.status == status.value)
            count_query = count_query.where(OrderModel.status == status.value)

        for sort_order in page_request.sort:
            column = _SORT_COLUMNS.get(sort_order.property)
            if column is None:
                raise ValidationError(
                    f"Cannot sort orders by '{sort_order.property}'", field="sort"
                )
            query = query.order_by(column.asc() if sort_order.ascending else column.desc())

        total = (await self._session.execute(count_query)).scalar_one()

        result = await self._session.execute(
            query.offset(page_request.offset).limit(page_request.size)
        )
        models = result.scalars().all()

        return Page(
            content=[OrderMapper.to_domain(model) for model in models],
            request=page_request,
            total_elements=total,
        )

    async def delete_all(self) -> int:
        """Remove every order (test cleanup only).

        Returns:
            Number of deleted rows
        """
        result = await self._session.execute(
            delete(OrderModel).execution_options(synchronize_session=False)
        )
        self._session.expire_all()
        return result.rowcount
