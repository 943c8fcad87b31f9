"""
Timing wrapper for fallible operations (data access, remote calls)
"""
import asyncio
import time
from typing import Awaitable, Callable, Dict, Optional, TypeVar

from ..core.enums import FailureKind, OperationStatus
from ..core.logging import get_logger
from .instruments import InstrumentRegistry

logger = get_logger(__name__)

T = TypeVar("T")

OPERATION_NAME = "operation.name"
OPERATION_STATUS = "operation.status"
ERROR_TYPE = "error.type"


class TimedOperation:
    """
    Times an operation and records one ``operation.duration`` entry per call.

    The entry is tagged with the operation name and ``operation.status``
    ("succeeded" or "failed"). Failures are re-raised unchanged after the
    duration has been recorded.
    """

    def __init__(self, registry: InstrumentRegistry):
        self.registry = registry

    async def run(self, name: str, action: Callable[[], Awaitable[T]]) -> T:
        """
        Await ``action()`` and record its wall-clock duration

        Args:
            name: Operation name, recorded as ``operation.name``
            action: Zero-argument callable returning an awaitable

        Returns:
            Whatever the action returns

        Raises:
            Whatever the action raises, including ``asyncio.CancelledError``
            and other ``BaseException`` subclasses
        """
        start = time.perf_counter()
        try:
            result = await action()
        except BaseException as exc:
            elapsed = time.perf_counter() - start
            self._record(name, elapsed, exc)
            raise
        elapsed = time.perf_counter() - start
        self._record(name, elapsed)
        return result

    def run_sync(self, name: str, action: Callable[[], T]) -> T:
        """blocking counterpart of run()"""
        start = time.perf_counter()
        try:
            result = action()
        except BaseException as exc:
            elapsed = time.perf_counter() - start
            self._record(name, elapsed, exc)
            raise
        elapsed = time.perf_counter() - start
        self._record(name, elapsed)
        return result

    def _record(self, name: str, elapsed: float, error: Optional[BaseException] = None) -> None:
        attributes: Dict[str, str] = {OPERATION_NAME: name}
        if error is None:
            attributes[OPERATION_STATUS] = OperationStatus.SUCCEEDED.value
        else:
            attributes[OPERATION_STATUS] = OperationStatus.FAILED.value
            if isinstance(error, asyncio.CancelledError):
                attributes[ERROR_TYPE] = FailureKind.CANCELLED.value
            else:
                attributes[ERROR_TYPE] = type(error).__name__

        try:
            self.registry.operation_duration.record(elapsed, attributes)
        except Exception as e:
            # telemetry must never fail the operation it observes
            logger.warning(
                "Failed to record operation duration",
                operation=name,
                error=str(e),
                error_type=type(e).__name__,
            )
