"""Helpers shared by test modules."""

from typing import Any, Dict, List

from structlog.testing import LogCapture

TEST_NAMESPACE = "unit-test.ecommerce"


def points_with(points: List[Any], **attributes: str) -> List[Any]:
    """Data points whose attributes include all the given key/values.

    Keys use underscores for dots: operation_name -> operation.name.
    """
    wanted: Dict[str, str] = {k.replace("_", "."): v for k, v in attributes.items()}
    return [
        p for p in points
        if all(dict(p.attributes).get(k) == v for k, v in wanted.items())
    ]


def request_logs(log_output: LogCapture) -> List[Dict[str, Any]]:
    """Records emitted by CorrelationMiddleware."""
    return [e for e in log_output.entries if str(e.get("event", "")).startswith("HTTP request")]
