"""
Application factory - builds the FastAPI app and its instrumentation
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry.sdk.metrics import MeterProvider

from ecommerce_api.api.error_handlers import register_error_handlers
from ecommerce_api.api.v1.handlers.health_handler import metrics_router
from ecommerce_api.api.v1.router import api_router
from ecommerce_api.config import Settings, get_settings
from ecommerce_api.core.logging import get_logger
from ecommerce_api.infrastructure.persistence import InMemoryOrderRepository, OrderRepository
from ecommerce_api.observability.business import BusinessEventRecorder
from ecommerce_api.observability.instruments import InstrumentRegistry
from ecommerce_api.observability.middleware import CorrelationMiddleware
from ecommerce_api.observability.request_context import CORRELATION_HEADER
from ecommerce_api.observability.telemetry import configure_telemetry, instrument_app
from ecommerce_api.observability.timing import TimedOperation
from ecommerce_api.services.order_service import OrderService

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    meter_provider: Optional[MeterProvider] = None,
    order_repository: Optional[OrderRepository] = None,
) -> FastAPI:
    """
    Build the application and its instrumentation

    Args:
        settings: Application settings (environment if None)
        meter_provider: Meter provider to register instruments with;
            one is configured from settings if None and owned by the app
        order_repository: Order persistence (in-memory if None)

    Raises:
        InstrumentationError: the measurement namespace could not be
            registered; the service must not start unobserved
    """
    settings = settings or get_settings()
    owns_meter_provider = meter_provider is None
    if meter_provider is None:
        meter_provider = configure_telemetry(settings)

    instruments = InstrumentRegistry(
        settings.metrics_namespace,
        meter_provider=meter_provider,
        currency=settings.CURRENCY,
        version=settings.APP_VERSION,
    )
    repository = order_repository or InMemoryOrderRepository()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifecycle events for FastAPI
        Runs on application startup and shutdown
        """
        logger.info(
            "Starting e-commerce API",
            app_name=settings.APP_NAME,
            version=settings.APP_VERSION,
            metrics_namespace=instruments.namespace,
            debug=settings.DEBUG
        )

        yield

        logger.info("Shutting down e-commerce API")
        await repository.close()
        instruments.close()
        if owns_meter_provider:
            meter_provider.shutdown()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="E-commerce API with request correlation, structured logging and metrics",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    app.state.settings = settings
    app.state.instruments = instruments
    app.state.order_service = OrderService(
        repository=repository,
        timer=TimedOperation(instruments),
        events=BusinessEventRecorder(instruments),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER, "Location"],
    )
    # added last, so it wraps every other application middleware
    app.add_middleware(CorrelationMiddleware)

    register_error_handlers(app)

    app.include_router(api_router)
    app.include_router(metrics_router)

    @app.get("/ping", include_in_schema=False)
    async def ping():
        """Simple ping endpoint"""
        return {"status": "pong"}

    instrument_app(app, settings)
    return app

