"""
Pydantic models for API responses
"""
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ecommerce_api.core.enums import OrderStatus
from ecommerce_api.models.domain import Order


class OrderResponse(BaseModel):
    """Order representation returned by the API"""
    id: uuid.UUID = Field(..., description="Order id")
    user_id: uuid.UUID = Field(..., description="Owner of the order")
    total_amount: Decimal = Field(..., description="Order total")
    status: OrderStatus = Field(..., description="Order status")
    created_at: datetime = Field(..., description="Creation time (UTC)")

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(**order.model_dump())


class ErrorResponse(BaseModel):
    """Error body"""
    error: str = Field(..., description="Error summary")
    message: str = Field(..., description="Human readable message")
    details: Optional[Dict[str, Any]] = Field(None, description="Extra context")


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    metrics_namespace: str = Field(..., description="Registered measurement namespace")
