"""
FastAPI dependencies for dependency injection
Components are built once by the application factory and kept on app.state
"""
from typing import Annotated

from fastapi import Depends, Request

from ecommerce_api.config import Settings
from ecommerce_api.observability.instruments import InstrumentRegistry
from ecommerce_api.services.order_service import OrderService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with"""
    return request.app.state.settings


def get_instrument_registry(request: Request) -> InstrumentRegistry:
    """Process-wide instrument registry"""
    return request.app.state.instruments


def get_order_service(request: Request) -> OrderService:
    """Order service wired with the repository and instrumentation"""
    return request.app.state.order_service


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
InstrumentRegistryDep = Annotated[InstrumentRegistry, Depends(get_instrument_registry)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
