"""
Metric instrument registry for the e-commerce namespace.

Every instrument the service writes to is declared here once, with a fixed
name, unit and kind. Callers reach instruments by role (attribute or
``InstrumentRole``), never by a free-form name.
"""
import threading
import weakref
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Set, Type, Union

from opentelemetry import metrics
from opentelemetry.metrics import Counter, Histogram, MeterProvider

from ..core.enums import InstrumentKind
from ..core.exceptions import InstrumentationError
from ..core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class InstrumentSpec:
    """Immutable description of one measurement channel"""
    name: str
    unit: str
    kind: InstrumentKind
    value_type: Type[Union[int, float]]
    description: str


# histogram bucket bounds in seconds
DURATION_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)

OPERATION_DURATION = InstrumentSpec(
    name="operation.duration",
    unit="s",
    kind=InstrumentKind.HISTOGRAM,
    value_type=float,
    description="Measures the duration of data-access operations in seconds.",
)

EVENTS_CREATED = InstrumentSpec(
    name="events.created.count",
    unit="{count}",
    kind=InstrumentKind.COUNTER,
    value_type=int,
    description="Counts the number of business events (orders) attempted.",
)

# unit follows the configured currency, see InstrumentRegistry
EVENTS_VALUE = InstrumentSpec(
    name="events.value.total",
    unit="{USD}",
    kind=InstrumentKind.COUNTER,
    value_type=float,
    description="Tracks the cumulative monetary value of business events.",
)


class InstrumentRole(str, Enum):
    """Roles under which the registry exposes its instruments"""
    OPERATION_DURATION = "operation_duration"
    EVENTS_CREATED = "events_created"
    EVENTS_VALUE = "events_value"


# namespaces claimed per meter provider
_claimed_namespaces: "weakref.WeakKeyDictionary[MeterProvider, Set[str]]" = (
    weakref.WeakKeyDictionary()
)
_claim_lock = threading.Lock()


def _claim_namespace(provider: MeterProvider, namespace: str) -> None:
    with _claim_lock:
        claimed = _claimed_namespaces.setdefault(provider, set())
        if namespace in claimed:
            raise InstrumentationError(
                f"Measurement namespace '{namespace}' is already registered",
                details={"namespace": namespace},
            )
        claimed.add(namespace)


def _release_namespace(provider: MeterProvider, namespace: str) -> None:
    with _claim_lock:
        claimed = _claimed_namespaces.get(provider)
        if claimed is not None:
            claimed.discard(namespace)


class InstrumentRegistry:
    """
    Owns the measurement namespace and its instruments.

    Construct exactly one per process (per meter provider) at startup and
    inject it into consumers. OpenTelemetry instruments aggregate
    internally under a lock, so concurrent writers need no extra
    synchronization.
    """

    def __init__(
        self,
        namespace: str,
        meter_provider: Optional[MeterProvider] = None,
        currency: str = "USD",
        version: Optional[str] = None,
    ):
        """
        Register the namespace and declare all instruments

        Args:
            namespace: Stable meter name, e.g. "ecommerce-api.ecommerce"
            meter_provider: Provider to register with (global one if None)
            currency: ISO currency code for the event value unit
            version: Instrumentation scope version

        Raises:
            InstrumentationError: namespace already registered or the
                meter could not be created
        """
        self.namespace = namespace
        self._provider = meter_provider or metrics.get_meter_provider()

        _claim_namespace(self._provider, namespace)
        try:
            self._meter = self._provider.get_meter(namespace, version)

            self.specs = {
                InstrumentRole.OPERATION_DURATION: OPERATION_DURATION,
                InstrumentRole.EVENTS_CREATED: EVENTS_CREATED,
                InstrumentRole.EVENTS_VALUE: replace(EVENTS_VALUE, unit=f"{{{currency}}}"),
            }

            self.operation_duration: Histogram = self._create(
                self.specs[InstrumentRole.OPERATION_DURATION]
            )
            self.events_created: Counter = self._create(
                self.specs[InstrumentRole.EVENTS_CREATED]
            )
            self.events_value: Counter = self._create(
                self.specs[InstrumentRole.EVENTS_VALUE]
            )
        except Exception as e:
            _release_namespace(self._provider, namespace)
            raise InstrumentationError(
                f"Failed to register measurement namespace '{namespace}'",
                details={"namespace": namespace, "error": str(e)},
            ) from e

        logger.info(
            "Instrument registry initialized",
            namespace=namespace,
            instruments=[spec.name for spec in self.specs.values()],
        )

    def _create(self, spec: InstrumentSpec):
        if spec.kind is InstrumentKind.HISTOGRAM:
            return self._meter.create_histogram(
                name=spec.name,
                unit=spec.unit,
                description=spec.description,
                explicit_bucket_boundaries_advisory=DURATION_BUCKETS,
            )
        return self._meter.create_counter(
            name=spec.name, unit=spec.unit, description=spec.description
        )

    def get(self, role: InstrumentRole) -> Union[Counter, Histogram]:
        """get instrument handle by role"""
        return getattr(self, InstrumentRole(role).value)

    def spec(self, role: InstrumentRole) -> InstrumentSpec:
        """get instrument description by role"""
        return self.specs[InstrumentRole(role)]

    def close(self) -> None:
        """release the namespace so it can be registered again"""
        _release_namespace(self._provider, self.namespace)
        logger.debug("Instrument registry closed", namespace=self.namespace)
