"""
Order service - order use cases with instrumentation
"""
import asyncio
import uuid
from decimal import Decimal
from typing import Optional

from ecommerce_api.core.logging import get_logger
from ecommerce_api.infrastructure.persistence.base_repository import OrderRepository
from ecommerce_api.models.domain import Order
from ecommerce_api.observability.business import BusinessEventRecorder
from ecommerce_api.observability.timing import TimedOperation

logger = get_logger(__name__)

SAVE_OPERATION = "order.save"
FETCH_OPERATION = "order.fetch"


class OrderService:
    """
    Orchestrates order use cases
    Domain entity → repository, timed and counted
    """

    def __init__(
        self,
        repository: OrderRepository,
        timer: TimedOperation,
        events: BusinessEventRecorder
    ):
        """
        Args:
            repository: Order persistence
            timer: Operation duration wrapper
            events: Business counters
        """
        self.repository = repository
        self.timer = timer
        self.events = events

    async def create_order(self, user_id: uuid.UUID, total_amount: Decimal) -> Order:
        """
        Create and persist a new order

        Every attempt is counted: completed on success, failed otherwise,
        with the requested amount in both cases.

        Raises:
            OrderValidationError: Amount rejected by the domain
            RepositoryError: Persistence failed
        """
        try:
            order = await self.timer.run(
                SAVE_OPERATION,
                lambda: self._place_order(user_id, total_amount)
            )
        except (Exception, asyncio.CancelledError) as e:
            logger.error(
                "Failed to create order",
                user_id=str(user_id),
                error=str(e),
                error_type=type(e).__name__
            )
            self.events.record_failed(total_amount)
            raise

        logger.info(
            "Order created",
            order_id=str(order.id),
            user_id=str(user_id)
        )
        self.events.record_completed(total_amount)
        return order

    async def get_order(self, order_id: uuid.UUID) -> Optional[Order]:
        """Fetch an order, None if it does not exist"""
        return await self.timer.run(
            FETCH_OPERATION,
            lambda: self.repository.get_by_id(order_id)
        )

    async def _place_order(self, user_id: uuid.UUID, total_amount: Decimal) -> Order:
        order = Order.create(user_id, total_amount)
        await self.repository.save(order)
        # status change follows a successful write
        order.mark_as_completed()
        return order
