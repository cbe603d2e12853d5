"""
In-memory Order Repository Implementation.

Process-local storage for demos and tests. Every operation runs under one
asyncio.Lock, so each call is atomic with respect to other coroutines.
"""
import asyncio
import itertools
import logging
from dataclasses import replace
from typing import Dict, Optional

from core.domain.entities.order import SORTABLE_PROPERTIES, Order, utcnow
from core.domain.enums import OrderStatus
from core.domain.exceptions import ConcurrencyConflictError, ValidationError
from core.domain.repositories.order_repository import OrderRepository
from core.domain.value_objects import Page, PageRequest


logger = logging.getLogger(__name__)


class InMemoryOrderStore:
    """Shared state behind InMemoryOrderRepository instances."""

    def __init__(self):
        self.rows: Dict[int, Order] = {}
        self.ids = itertools.count(1)
        self.lock = asyncio.Lock()


class InMemoryOrderRepository(OrderRepository):
    """
    In-memory implementation of OrderRepository.

    Hands out copies so callers never mutate stored rows directly.
    """

    def __init__(self, store: InMemoryOrderStore):
        self._store = store

    async def add(self, order: Order) -> Order:
        async with self._store.lock:
            now = utcnow()
            stored = replace(
                order,
                id=next(self._store.ids),
                version=0,
                created_at=now,
                updated_at=now,
            )
            self._store.rows[stored.id] = stored

        logger.info(f"Inserted order {stored.id} into in-memory store")
        return stored.copy()

    async def find_by_id(self, order_id: int) -> Optional[Order]:
        async with self._store.lock:
            order = self._store.rows.get(order_id)
            return order.copy() if order else None

    async def update_status(self, order: Order, expected_version: int) -> Order:
        async with self._store.lock:
            current = self._store.rows.get(order.id)
            if current is None or current.version != expected_version:
                logger.warning(
                    f"Version check failed for order {order.id} "
                    f"(expected version {expected_version})"
                )
                raise ConcurrencyConflictError(order.id, expected_version)

            updated = replace(
                current,
                status=order.status,
                version=current.version + 1,
                updated_at=utcnow(),
            )
            self._store.rows[order.id] = updated
            return updated.copy()

    async def find_page(
        self,
        status: Optional[OrderStatus],
        page_request: PageRequest,
    ) -> Page[Order]:
        for sort_order in page_request.sort:
            if sort_order.property not in SORTABLE_PROPERTIES:
                raise ValidationError(
                    f"Cannot sort orders by '{sort_order.property}'", field="sort"
                )

        async with self._store.lock:
            matches = [
                order.copy()
                for order in self._store.rows.values()
                if status is None or order.status == status
            ]

        # Stable sorts applied from the least significant key
        for sort_order in reversed(page_request.sort):
            matches.sort(
                key=lambda order: _sort_key(order, sort_order.property),
                reverse=not sort_order.ascending,
            )

        start = page_request.offset
        return Page(
            content=matches[start:start + page_request.size],
            request=page_request,
            total_elements=len(matches),
        )

    async def delete_all(self) -> int:
        async with self._store.lock:
            count = len(self._store.rows)
            self._store.rows.clear()

        logger.info(f"In-memory store cleared ({count} orders)")
        return count


def _sort_key(order: Order, prop: str):
    value = getattr(order, prop)
    return value.value if isinstance(value, OrderStatus) else value
