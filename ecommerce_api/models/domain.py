"""
Domain models - business entities
"""
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, Field

from ecommerce_api.core.enums import OrderStatus
from ecommerce_api.core.exceptions import OrderStateError, OrderValidationError


class Order(BaseModel):
    """
    Order aggregate

    Create through ``Order.create`` so the business rules are applied.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, description="Order id")
    user_id: uuid.UUID = Field(..., description="Owner of the order")
    total_amount: Decimal = Field(..., description="Order total")
    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation time (UTC)"
    )

    @classmethod
    def create(cls, user_id: uuid.UUID, total_amount: Decimal) -> "Order":
        """
        Create a new pending order

        Raises:
            OrderValidationError: total amount is zero or negative
        """
        if not total_amount > 0:
            raise OrderValidationError(
                "Order total amount must be positive",
                details={"total_amount": str(total_amount)}
            )
        return cls(user_id=user_id, total_amount=total_amount)

    def mark_as_completed(self) -> None:
        """Only pending orders can be completed"""
        if self.status is not OrderStatus.PENDING:
            raise OrderStateError(
                "Only pending orders can be marked as completed",
                details={"order_id": str(self.id), "status": self.status.value}
            )
        self.status = OrderStatus.COMPLETED

    def mark_as_failed(self) -> None:
        self.status = OrderStatus.FAILED
