"""Application DTOs."""

from .order_dto import CreateOrderRequest, OrderPageResponse, OrderResponse, SortDTO
from .pagination import build_page_request, parse_sort, to_wire_property

__all__ = [
    "build_page_request",
    "CreateOrderRequest",
    "OrderPageResponse",
    "OrderResponse",
    "parse_sort",
    "SortDTO",
    "to_wire_property",
]
