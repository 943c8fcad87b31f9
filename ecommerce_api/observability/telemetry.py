from fastapi import FastAPI, Response
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ..config import Settings
from ..core.logging import get_logger

logger = get_logger(__name__)


def configure_telemetry(settings: Settings) -> MeterProvider:
    """build the meter provider (prometheus and/or otlp) and otlp tracing"""
    resource = Resource.create(
        {
            "service.name": settings.APP_NAME,
            "service.version": settings.APP_VERSION,
        }
    )

    metric_readers = []
    if settings.ENABLE_METRICS:
        metric_readers.append(PrometheusMetricReader())

    if settings.ENABLE_TELEMETRY:
        # traces
        trace_provider = TracerProvider(resource=resource)
        trace_exporter = OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT, insecure=True)
        trace_provider.add_span_processor(BatchSpanProcessor(trace_exporter))
        trace.set_tracer_provider(trace_provider)

        # metrics
        metric_readers.append(
            PeriodicExportingMetricReader(
                OTLPMetricExporter(endpoint=settings.OTLP_ENDPOINT, insecure=True),
                export_interval_millis=settings.METRICS_EXPORT_INTERVAL_MS,
            )
        )

    meter_provider = MeterProvider(resource=resource, metric_readers=metric_readers)
    metrics.set_meter_provider(meter_provider)

    logger.info(
        "telemetry configured",
        prometheus=settings.ENABLE_METRICS,
        otlp=settings.ENABLE_TELEMETRY,
        otlp_endpoint=settings.OTLP_ENDPOINT if settings.ENABLE_TELEMETRY else None,
    )
    return meter_provider


def instrument_app(app: FastAPI, settings: Settings) -> None:
    """instrument fastapi app with opentelemetry"""
    if not settings.ENABLE_TELEMETRY:
        return

    FastAPIInstrumentor.instrument_app(app)
    logger.info("fastapi instrumented with opentelemetry")


def metrics_endpoint() -> Response:
    """prometheus metrics endpoint"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
