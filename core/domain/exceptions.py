"""
Domain exceptions.
"""
from typing import Optional


class DomainException(Exception):
    """Base exception for domain layer."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class EntityNotFoundError(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_name: str, entity_id: object):
        super().__init__(
            message=f"{entity_name} with id '{entity_id}' not found",
            code="ENTITY_NOT_FOUND"
        )
        self.entity_name = entity_name
        self.entity_id = entity_id


class OrderNotFoundError(EntityNotFoundError):
    """Raised when no order exists for the requested id."""

    def __init__(self, order_id: int):
        super().__init__(entity_name="Order", entity_id=order_id)
        self.order_id = order_id


class ValidationError(DomainException):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message=message, code="VALIDATION_ERROR")
        self.field = field


class InvalidOrderAmountError(ValidationError):
    """Raised when an order total is missing or not strictly positive."""

    def __init__(self, amount: object):
        super().__init__(
            message=f"Order total amount must be positive, got: {amount}",
            field="totalAmount",
        )
        self.amount = amount


class ConcurrencyConflictError(DomainException):
    """Raised when an update carries a stale version."""

    def __init__(self, order_id: int, expected_version: int):
        super().__init__(
            message=(
                f"Order {order_id} was modified concurrently "
                f"(expected version {expected_version})"
            ),
            code="CONCURRENCY_CONFLICT",
        )
        self.order_id = order_id
        self.expected_version = expected_version
