"""Order endpoints for REST API."""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Request, Response

from core.application.dtos.order_dto import CreateOrderRequest, OrderPageResponse, OrderResponse
from core.application.dtos.pagination import build_page_request
from core.application.services.order_service import OrderApplicationService
from core.domain.enums import OrderStatus
from core.domain.exceptions import ValidationError
from core.settings import AppSettings

from apps.api.deps import get_order_service, get_settings, require_principal

logger = logging.getLogger(__name__)

# Ids are 64-bit signed integers in storage
MAX_ORDER_ID = 2**63 - 1
OrderId = Annotated[int, Path(ge=-MAX_ORDER_ID - 1, le=MAX_ORDER_ID, description="Order id")]

router = APIRouter(
    prefix="/orders",
    tags=["orders"],
    dependencies=[Depends(require_principal)],
    responses={401: {"description": "Missing or invalid bearer token"}},
)


@router.post(
    "",
    response_model=OrderResponse,
    status_code=201,
    summary="Create an order",
    description="Creates an order and returns the created resource plus a Location header.",
    responses={400: {"description": "Validation error"}},
)
async def create_order(
    request: CreateOrderRequest,
    http_request: Request,
    response: Response,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderResponse:
    """Create a new order.

    Args:
        request: CreateOrderRequest DTO
        http_request: Incoming request, used to build the Location header
        response: Outgoing response headers
        service: OrderApplicationService instance

    Returns:
        OrderResponse with created order details
    """
    order = await service.create_order(request.total_amount)

    response.headers["Location"] = str(
        http_request.app.url_path_for("get_order", order_id=str(order.id))
    )
    return OrderResponse.from_domain(order)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get an order by id",
    responses={404: {"description": "Order not found"}},
)
async def get_order(
    order_id: OrderId,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderResponse:
    """Get order by ID.

    Raises:
        OrderNotFoundError: Mapped to 404
    """
    order = await service.get_order(order_id)
    return OrderResponse.from_domain(order)


@router.put(
    "/{order_id}/cancel",
    response_model=OrderResponse,
    summary="Cancel an order",
    description="Cancels an existing order by id. Cancelling a cancelled order succeeds unchanged.",
    responses={404: {"description": "Order not found"}},
)
async def cancel_order(
    order_id: OrderId,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderResponse:
    order = await service.cancel_order(order_id)
    return OrderResponse.from_domain(order)


@router.get(
    "",
    response_model=OrderPageResponse,
    summary="List orders",
    description="""
    Returns orders, optionally filtered by status.

    Defaults:
    - page=0
    - size=20
    - sort=id,asc
    """,
    responses={400: {"description": "Invalid query parameter"}},
)
async def list_orders(
    status: Optional[OrderStatus] = Query(default=None, description="Optional status filter"),
    page: int = Query(default=0, ge=0, le=MAX_ORDER_ID, description="Zero-based page index"),
    size: Optional[int] = Query(default=None, ge=1, description="Page size (default 20)"),
    sort: List[str] = Query(
        default=[],
        description="Ordering as property[,asc|desc]; repeatable",
        examples=["createdAt,desc"],
    ),
    settings: AppSettings = Depends(get_settings),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderPageResponse:
    """List orders with pagination.

    Args:
        status: Only return orders in this status
        page: Zero-based page index
        size: Page size, at most ORDERS_MAX_PAGE_SIZE
        sort: Sort specifications
        settings: Application settings
        service: OrderApplicationService instance

    Returns:
        OrderPageResponse
    """
    if size is None:
        size = settings.orders.default_page_size
    elif size > settings.orders.max_page_size:
        raise ValidationError(
            f"Page size must not exceed {settings.orders.max_page_size}", field="size"
        )

    page_request = build_page_request(page, size, sort)
    result = await service.list_orders(status=status, page_request=page_request)
    return OrderPageResponse.from_page(result)
