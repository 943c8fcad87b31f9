"""Shared fixtures: in-memory metrics, captured logs, test application."""

from typing import Any, Callable, List

import pytest
import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader
from structlog.testing import LogCapture

from ecommerce_api.application import create_app
from ecommerce_api.config import Settings
from ecommerce_api.infrastructure.persistence import InMemoryOrderRepository
from ecommerce_api.observability.business import BusinessEventRecorder
from ecommerce_api.observability.instruments import InstrumentRegistry
from ecommerce_api.observability.timing import TimedOperation

from tests.helpers import TEST_NAMESPACE


# ============================================================================
# Logging
# ============================================================================


@pytest.fixture
def log_output() -> LogCapture:
    return LogCapture()


@pytest.fixture(autouse=True)
def configure_structlog(log_output: LogCapture):
    """Route every log record, with its bound context, into log_output."""
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, log_output],
        cache_logger_on_first_use=False,
    )
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


# ============================================================================
# Metrics
# ============================================================================


@pytest.fixture
def metric_reader() -> InMemoryMetricReader:
    return InMemoryMetricReader()


@pytest.fixture
def meter_provider(metric_reader: InMemoryMetricReader):
    provider = MeterProvider(metric_readers=[metric_reader])
    yield provider
    provider.shutdown()


@pytest.fixture
def registry(meter_provider: MeterProvider):
    registry = InstrumentRegistry(TEST_NAMESPACE, meter_provider=meter_provider)
    yield registry
    registry.close()


@pytest.fixture
def timer(registry: InstrumentRegistry) -> TimedOperation:
    return TimedOperation(registry)


@pytest.fixture
def events(registry: InstrumentRegistry) -> BusinessEventRecorder:
    return BusinessEventRecorder(registry)


@pytest.fixture
def metric_points(metric_reader: InMemoryMetricReader) -> Callable[[str], List[Any]]:
    """Return a function collecting the current data points of a metric."""

    def _collect(name: str) -> List[Any]:
        data = metric_reader.get_metrics_data()
        points: List[Any] = []
        if data is None:
            return points
        for resource_metrics in data.resource_metrics:
            for scope_metrics in resource_metrics.scope_metrics:
                for metric in scope_metrics.metrics:
                    if metric.name == name:
                        points.extend(metric.data.data_points)
        return points

    return _collect


# ============================================================================
# Application
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        APP_NAME="test-service",
        ENABLE_METRICS=False,
        ENABLE_TELEMETRY=False,
    )


@pytest.fixture
def order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def app(settings: Settings, meter_provider: MeterProvider, order_repository) -> FastAPI:
    return create_app(
        settings,
        meter_provider=meter_provider,
        order_repository=order_repository,
    )


@pytest.fixture
def client(app: FastAPI):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
