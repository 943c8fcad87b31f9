"""observability layer: metric instruments, operation timing, request correlation"""

from .business import BusinessEventRecorder
from .instruments import (
    DURATION_BUCKETS,
    EVENTS_CREATED,
    EVENTS_VALUE,
    OPERATION_DURATION,
    InstrumentRegistry,
    InstrumentRole,
    InstrumentSpec,
)
from .middleware import CorrelationMiddleware
from .request_context import (
    CORRELATION_HEADER,
    RequestContext,
    log_level_for_status,
    resolve_client_ip,
    resolve_correlation_id,
)
from .telemetry import configure_telemetry, instrument_app, metrics_endpoint
from .timing import TimedOperation

__all__ = [
    "BusinessEventRecorder",
    "DURATION_BUCKETS",
    "EVENTS_CREATED",
    "EVENTS_VALUE",
    "OPERATION_DURATION",
    "InstrumentRegistry",
    "InstrumentRole",
    "InstrumentSpec",
    "CorrelationMiddleware",
    "CORRELATION_HEADER",
    "RequestContext",
    "log_level_for_status",
    "resolve_client_ip",
    "resolve_correlation_id",
    "configure_telemetry",
    "instrument_app",
    "metrics_endpoint",
    "TimedOperation",
]
