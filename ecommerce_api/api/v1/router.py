"""
Main API v1 router
Combines all handlers
"""
from fastapi import APIRouter

from ecommerce_api.api.v1.handlers import order_handler, health_handler

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(order_handler.router)
api_router.include_router(health_handler.router)
