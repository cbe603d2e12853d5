"""Integration tests for the SQLAlchemy and in-memory order repositories."""

from decimal import Decimal

import pytest

from core.data.repositories.memory_order_repository import InMemoryOrderRepository
from core.data.uow import create_uow
from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.exceptions import ConcurrencyConflictError, ValidationError
from core.domain.value_objects import PageRequest, SortDirection, SortOrder


# =============================================================================
# SQLALCHEMY REPOSITORY
# =============================================================================

@pytest.mark.asyncio
async def test_sql_add_and_find(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        created = await uow.orders.add(Order.create(Decimal("49.99")))
        await uow.commit()

    async with create_uow(test_session_factory) as uow:
        fetched = await uow.orders.find_by_id(created.id)

    assert fetched is not None
    assert fetched.id == created.id
    assert fetched.version == 0
    assert fetched.status == OrderStatus.CREATED
    assert fetched.total_amount == Decimal("49.99")
    assert fetched.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_sql_find_missing_returns_none(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        assert await uow.orders.find_by_id(42) is None


@pytest.mark.asyncio
async def test_sql_uncommitted_work_is_rolled_back(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        created = await uow.orders.add(Order.create(Decimal("1.00")))

    async with create_uow(test_session_factory) as uow:
        assert await uow.orders.find_by_id(created.id) is None


@pytest.mark.asyncio
async def test_sql_update_status_increments_version(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        created = await uow.orders.add(Order.create(Decimal("10.00")))
        await uow.commit()

    async with create_uow(test_session_factory) as uow:
        order = await uow.orders.find_by_id(created.id)
        order.cancel()
        updated = await uow.orders.update_status(order, expected_version=0)
        await uow.commit()

    assert updated.version == 1

    async with create_uow(test_session_factory) as uow:
        stored = await uow.orders.find_by_id(created.id)

    assert stored.status == OrderStatus.CANCELLED
    assert stored.version == 1


@pytest.mark.asyncio
async def test_sql_update_status_with_stale_version_conflicts(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        created = await uow.orders.add(Order.create(Decimal("10.00")))
        await uow.commit()

    # Two readers see version 0; the first writer wins
    async with create_uow(test_session_factory) as uow:
        stale = await uow.orders.find_by_id(created.id)

    async with create_uow(test_session_factory) as uow:
        winner = await uow.orders.find_by_id(created.id)
        winner.cancel()
        await uow.orders.update_status(winner, expected_version=0)
        await uow.commit()

    stale.cancel()
    with pytest.raises(ConcurrencyConflictError):
        async with create_uow(test_session_factory) as uow:
            await uow.orders.update_status(stale, expected_version=0)
            await uow.commit()

    async with create_uow(test_session_factory) as uow:
        stored = await uow.orders.find_by_id(created.id)

    assert stored.version == 1


@pytest.mark.asyncio
async def test_sql_find_page_with_filter_and_sort(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        for amount in ("3.00", "1.00", "2.00"):
            await uow.orders.add(Order.create(Decimal(amount)))
        await uow.commit()

    async with create_uow(test_session_factory) as uow:
        page = await uow.orders.find_page(
            OrderStatus.CREATED,
            PageRequest(size=2, sort=(SortOrder("total_amount", SortDirection.ASC),)),
        )

    assert page.total_elements == 3
    assert [order.total_amount for order in page.content] == [Decimal("1.00"), Decimal("2.00")]

    async with create_uow(test_session_factory) as uow:
        cancelled = await uow.orders.find_page(OrderStatus.CANCELLED, PageRequest())

    assert cancelled.total_elements == 0
    assert cancelled.content == []


@pytest.mark.asyncio
async def test_sql_find_page_rejects_unknown_sort(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        with pytest.raises(ValidationError):
            await uow.orders.find_page(None, PageRequest(sort=(SortOrder("version"),)))


@pytest.mark.asyncio
async def test_sql_delete_all(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        await uow.orders.add(Order.create(Decimal("1.00")))
        await uow.orders.add(Order.create(Decimal("2.00")))
        await uow.commit()

    async with create_uow(test_session_factory) as uow:
        deleted = await uow.orders.delete_all()
        await uow.commit()

    assert deleted == 2

    async with create_uow(test_session_factory) as uow:
        page = await uow.orders.find_page(None, PageRequest())

    assert page.total_elements == 0


@pytest.mark.asyncio
async def test_sql_ids_are_not_reused_after_delete(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        first = await uow.orders.add(Order.create(Decimal("1.00")))
        await uow.commit()

    async with create_uow(test_session_factory) as uow:
        await uow.orders.delete_all()
        await uow.commit()

    async with create_uow(test_session_factory) as uow:
        second = await uow.orders.add(Order.create(Decimal("1.00")))
        await uow.commit()

    assert second.id > first.id


# =============================================================================
# IN-MEMORY REPOSITORY
# =============================================================================

@pytest.mark.asyncio
async def test_memory_add_and_find(memory_store):
    repository = InMemoryOrderRepository(memory_store)

    created = await repository.add(Order.create(Decimal("5.00")))
    fetched = await repository.find_by_id(created.id)

    assert created.id == 1
    assert fetched == created
    assert fetched is not created


@pytest.mark.asyncio
async def test_memory_returned_orders_are_copies(memory_store):
    repository = InMemoryOrderRepository(memory_store)
    created = await repository.add(Order.create(Decimal("5.00")))

    fetched = await repository.find_by_id(created.id)
    fetched.cancel()

    stored = await repository.find_by_id(created.id)
    assert stored.status == OrderStatus.CREATED


@pytest.mark.asyncio
async def test_memory_update_status_with_stale_version_conflicts(memory_store):
    repository = InMemoryOrderRepository(memory_store)
    created = await repository.add(Order.create(Decimal("5.00")))

    order = await repository.find_by_id(created.id)
    order.cancel()
    await repository.update_status(order, expected_version=0)

    with pytest.raises(ConcurrencyConflictError):
        await repository.update_status(order, expected_version=0)


@pytest.mark.asyncio
async def test_memory_update_status_missing_order_conflicts(memory_store):
    repository = InMemoryOrderRepository(memory_store)

    with pytest.raises(ConcurrencyConflictError):
        await repository.update_status(Order(total_amount=Decimal("1.00"), id=99), 0)


@pytest.mark.asyncio
async def test_memory_find_page_multi_key_sort(memory_store):
    repository = InMemoryOrderRepository(memory_store)
    first = await repository.add(Order.create(Decimal("2.00")))
    second = await repository.add(Order.create(Decimal("1.00")))
    third = await repository.add(Order.create(Decimal("2.00")))

    page = await repository.find_page(
        None,
        PageRequest(sort=(SortOrder("total_amount", SortDirection.DESC),)),
    )

    # equal amounts fall back to id ascending
    assert [order.id for order in page.content] == [first.id, third.id, second.id]


@pytest.mark.asyncio
async def test_memory_delete_all(memory_store):
    repository = InMemoryOrderRepository(memory_store)
    await repository.add(Order.create(Decimal("2.00")))

    assert await repository.delete_all() == 1
    assert (await repository.find_page(None, PageRequest())).total_elements == 0
