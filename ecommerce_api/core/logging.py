"""
Structured logging setup with structlog
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import EventDict


def add_severity_level(_logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """add severity field for cloud logging compatibility"""
    event_dict["severity"] = method_name.upper()
    return event_dict


def setup_logging(
    log_level: str = "INFO",
    is_debug: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structured logging

    Per-request fields bound with ``structlog.contextvars`` are merged into
    every record, so anything logged while a request is in flight carries
    that request's correlation data.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        is_debug: Debug mode (human-readable console output)
        stream: Output for rendered records (stdout if None)
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_severity_level,
    ]

    # Pretty output in debug mode, JSON in production
    if is_debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a logger for a module

    Args:
        name: Module name

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
