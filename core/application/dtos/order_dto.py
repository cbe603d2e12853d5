"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.value_objects import Page

from .pagination import to_wire_property

# Amounts go over the wire as JSON numbers, not strings
JsonAmount = Annotated[
    Decimal,
    PlainSerializer(lambda amount: float(amount), return_type=float, when_used="json"),
]


class CreateOrderRequest(BaseModel):
    """Request DTO for creating an order."""

    total_amount: Decimal = Field(
        ...,
        alias="totalAmount",
        gt=0,
        max_digits=19,
        decimal_places=2,
        description="Total order amount",
        examples=[49.99],
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class OrderResponse(BaseModel):
    """Response DTO for order details."""

    id: int = Field(..., description="Order id", examples=[123])
    status: OrderStatus = Field(..., description="Order status")
    total_amount: JsonAmount = Field(..., alias="totalAmount", examples=[49.99])
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        """Transform Order domain entity to OrderResponse.

        Args:
            order: Persisted order

        Returns:
            OrderResponse instance
        """
        return cls(
            id=order.id,
            status=order.status,
            total_amount=order.total_amount,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class SortDTO(BaseModel):
    """One ordering applied to a page."""

    property: str
    direction: str

    model_config = {"frozen": True}


class OrderPageResponse(BaseModel):
    """DTO for one page of orders."""

    content: List[OrderResponse] = Field(default_factory=list)
    number: int = Field(..., ge=0, description="Zero-based page index")
    size: int = Field(..., ge=1, description="Requested page size")
    total_elements: int = Field(..., ge=0, alias="totalElements")
    total_pages: int = Field(..., ge=0, alias="totalPages")
    number_of_elements: int = Field(..., ge=0, alias="numberOfElements")
    first: bool
    last: bool
    empty: bool
    sort: List[SortDTO] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def from_page(cls, page: Page[Order]) -> "OrderPageResponse":
        """Transform a page of Order entities to OrderPageResponse."""
        return cls(
            content=[OrderResponse.from_domain(order) for order in page.content],
            number=page.number,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            number_of_elements=page.number_of_elements,
            first=page.is_first,
            last=page.is_last,
            empty=not page.content,
            sort=[
                SortDTO(property=to_wire_property(order.property), direction=order.direction.value)
                for order in page.sort
            ],
        )
