"""
Order handlers
"""
import uuid

from fastapi import APIRouter, HTTPException, Request, Response, status

from ecommerce_api.api.dependencies import OrderServiceDep
from ecommerce_api.core.exceptions import OrderValidationError
from ecommerce_api.core.logging import get_logger
from ecommerce_api.models.requests import CreateOrderRequest
from ecommerce_api.models.responses import ErrorResponse, OrderResponse

logger = get_logger(__name__)
router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def create_order(
    body: CreateOrderRequest,
    request: Request,
    response: Response,
    order_service: OrderServiceDep
) -> OrderResponse:
    """
    Create a new order

    Raises:
        HTTPException 400: Order rejected by business rules
    """
    try:
        order = await order_service.create_order(
            user_id=body.user_id,
            total_amount=body.total_amount
        )
    except OrderValidationError as e:
        logger.warning("Order validation failed", error=e.message)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorResponse(
                error="Order validation failed",
                message=e.message,
                details=e.details
            ).model_dump()
        )

    response.headers["Location"] = str(
        request.url_for("get_order_by_id", order_id=str(order.id))
    )
    return OrderResponse.from_order(order)


@router.get(
    "/{order_id}",
    name="get_order_by_id",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_order(
    order_id: uuid.UUID,
    order_service: OrderServiceDep
) -> OrderResponse:
    """Fetch an order by id"""
    order = await order_service.get_order(order_id)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ErrorResponse(
                error="Order not found",
                message=f"Order {order_id} does not exist"
            ).model_dump(exclude_none=True)
        )
    return OrderResponse.from_order(order)
