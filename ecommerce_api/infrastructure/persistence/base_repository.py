"""
Abstract base class for order repositories
"""
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from ecommerce_api.models.domain import Order


class OrderRepository(ABC):
    """
    Persistence contract for the Order entity
    Keeps the application layer independent of the storage technology
    """

    @abstractmethod
    async def save(self, order: Order) -> None:
        """
        Persist a new order

        Args:
            order: Order entity to save
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: uuid.UUID) -> Optional[Order]:
        """
        Fetch an order by id

        Args:
            order_id: Order id

        Returns:
            The order, or None if it does not exist
        """
        pass

    async def close(self) -> None:
        """Release resources (optional)"""
        pass
