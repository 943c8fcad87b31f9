"""
Enums for type safety
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle states"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class EventStatus(str, Enum):
    """Outcome of a business event, used as the ``status`` tag"""
    COMPLETED = "completed"
    FAILED = "failed"


class OperationStatus(str, Enum):
    """Outcome of a timed operation, used as the ``operation.status`` tag"""
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Why a request or operation failed"""
    EXCEPTION = "exception"
    CANCELLED = "cancelled"


class InstrumentKind(str, Enum):
    """Measurement channel kinds"""
    COUNTER = "counter"
    HISTOGRAM = "histogram"
