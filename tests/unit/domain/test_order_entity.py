"""Unit tests for the Order aggregate."""

from decimal import Decimal

import pytest

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.exceptions import InvalidOrderAmountError, ValidationError


def test_create_starts_in_created_status():
    order = Order.create(Decimal("49.99"))

    assert order.status == OrderStatus.CREATED
    assert order.total_amount == Decimal("49.99")
    assert order.id is None
    assert order.version == 0
    assert order.created_at is None


def test_create_accepts_numbers_as_decimal():
    order = Order.create(12.5)

    assert order.total_amount == Decimal("12.5")


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-0.01"), -5, None, "abc", Decimal("NaN")])
def test_create_rejects_non_positive_or_invalid_amount(amount):
    with pytest.raises(InvalidOrderAmountError) as exc_info:
        Order.create(amount)

    assert exc_info.value.field == "totalAmount"
    assert isinstance(exc_info.value, ValidationError)


def test_cancel_transitions_created_order():
    order = Order.create(Decimal("10.00"))

    changed = order.cancel()

    assert changed is True
    assert order.status == OrderStatus.CANCELLED
    assert order.is_cancelled


def test_cancel_is_noop_for_cancelled_order():
    order = Order(total_amount=Decimal("10.00"), status=OrderStatus.CANCELLED, id=7, version=1)

    changed = order.cancel()

    assert changed is False
    assert order.status == OrderStatus.CANCELLED
    assert order.version == 1


def test_copy_is_detached():
    order = Order(total_amount=Decimal("10.00"), id=1)

    snapshot = order.copy()
    order.cancel()

    assert snapshot.status == OrderStatus.CREATED
    assert snapshot == Order(total_amount=Decimal("10.00"), id=1)
