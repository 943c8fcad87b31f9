"""
Pydantic models for incoming requests
"""
import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CreateOrderRequest(BaseModel):
    """Order creation request"""
    # amount rules live in the domain so rejected orders are still counted
    user_id: uuid.UUID = Field(..., description="User placing the order")
    total_amount: Decimal = Field(..., description="Order total")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user_id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "total_amount": "150.00"
            }
        }
    )
