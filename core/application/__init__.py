"""Application layer - services and DTOs."""

from .dtos import CreateOrderRequest, OrderPageResponse, OrderResponse
from .services import OrderApplicationService

__all__ = [
    # DTOs
    "CreateOrderRequest",
    "OrderPageResponse",
    "OrderResponse",
    # Services
    "OrderApplicationService",
]
