"""
In-process order storage
"""
import asyncio
import uuid
from typing import Dict, Optional

from ecommerce_api.core.exceptions import RepositoryError
from ecommerce_api.core.logging import get_logger
from ecommerce_api.infrastructure.persistence.base_repository import OrderRepository
from ecommerce_api.models.domain import Order

logger = get_logger(__name__)


class InMemoryOrderRepository(OrderRepository):
    """Order repository backed by a dict; stores copies, like a database would"""

    def __init__(self):
        self._orders: Dict[uuid.UUID, Order] = {}
        self._lock = asyncio.Lock()

    async def save(self, order: Order) -> None:
        async with self._lock:
            if order.id in self._orders:
                raise RepositoryError(
                    "Order already exists",
                    details={"order_id": str(order.id)}
                )
            self._orders[order.id] = order.model_copy(deep=True)
        logger.debug("Order saved", order_id=str(order.id))

    async def get_by_id(self, order_id: uuid.UUID) -> Optional[Order]:
        async with self._lock:
            order = self._orders.get(order_id)
        return order.model_copy(deep=True) if order is not None else None

    async def close(self) -> None:
        async with self._lock:
            self._orders.clear()
