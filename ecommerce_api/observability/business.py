"""
Business event counters (orders created and their value)
"""
import math
from decimal import Decimal
from typing import Optional, Union

from ..core.enums import EventStatus
from ..core.logging import get_logger
from .instruments import InstrumentRegistry

logger = get_logger(__name__)

STATUS = "status"

Magnitude = Union[int, float, Decimal]


class BusinessEventRecorder:
    """
    Records business events into the count and value counters.

    Both counters are written with the same ``status`` tag on completion
    and on failure, so failed attempts show up in monitoring alongside
    successful ones.
    """

    def __init__(self, registry: InstrumentRegistry):
        self.registry = registry

    def record(self, status: EventStatus, magnitude: Magnitude) -> None:
        """
        Count one event and add its magnitude

        Args:
            status: Event outcome
            magnitude: Event value (e.g. order amount), not validated here
        """
        attributes = {STATUS: EventStatus(status).value}

        self._add("events.created.count", self.registry.events_created, 1, attributes)

        value = self._to_value(magnitude)
        if value is None:
            logger.warning(
                "Skipping invalid business event value",
                magnitude=str(magnitude),
                status=attributes[STATUS],
            )
            return
        self._add("events.value.total", self.registry.events_value, value, attributes)

    def record_completed(self, magnitude: Magnitude) -> None:
        """record a completed event"""
        self.record(EventStatus.COMPLETED, magnitude)

    def record_failed(self, magnitude: Magnitude) -> None:
        """record a failed event"""
        self.record(EventStatus.FAILED, magnitude)

    @staticmethod
    def _to_value(magnitude: Magnitude) -> Optional[float]:
        try:
            value = float(magnitude)
        except (TypeError, ValueError):
            return None
        # monotonic counter: NaN, infinities and negatives cannot be added
        if not math.isfinite(value) or value < 0:
            return None
        return value

    @staticmethod
    def _add(name: str, counter, amount, attributes) -> None:
        try:
            counter.add(amount, attributes)
        except Exception as e:
            logger.warning(
                "Failed to record business event",
                instrument=name,
                error=str(e),
                error_type=type(e).__name__,
            )
