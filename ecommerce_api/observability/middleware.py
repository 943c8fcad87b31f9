"""
Request correlation and logging middleware
"""
import asyncio
import time
import uuid
from types import TracebackType
from typing import Any, Dict, Optional

import structlog
from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.enums import FailureKind
from ..core.logging import get_logger
from .request_context import (
    CORRELATION_HEADER,
    RequestContext,
    log_level_for_status,
    parse_content_length,
    resolve_correlation_id,
    resolve_session_id,
    resolve_user_id,
)

logger = get_logger(__name__)


class CorrelationMiddleware:
    """
    Correlates, times and logs every HTTP request.

    - resolves the correlation id (inbound X-Correlation-ID or a new UUID)
      and echoes it on the response
    - binds the request facts into structlog's context variables for the
      lifetime of the request only
    - logs one "started" record and one "finished" or "failed" record; the
      finished record's level follows the response status
    - re-raises unhandled exceptions for the outer error handler
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        correlation_id = resolve_correlation_id(request.headers)
        request_id = str(uuid.uuid4())
        # read by the unhandled-exception handler, which runs outside us
        request.state.correlation_id = correlation_id
        request.state.request_id = request_id

        context = RequestContext.from_request(request, request_id, correlation_id)
        url = str(request.url)
        response: Dict[str, Any] = {}

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers[CORRELATION_HEADER] = correlation_id
                response["status_code"] = message["status"]
                response["content_type"] = headers.get("content-type")
                response["content_length"] = parse_content_length(headers.get("content-length"))
            await send(message)

        start = time.perf_counter()
        with structlog.contextvars.bound_contextvars(**context.as_log_fields()):
            logger.info("HTTP request started", url=url)

            try:
                await self.app(scope, receive, send_wrapper)
            except asyncio.CancelledError as exc:
                self._log_failure(url, start, exc, FailureKind.CANCELLED)
                raise
            except Exception as exc:
                self._log_failure(url, start, exc, FailureKind.EXCEPTION)
                raise

            elapsed_ms = _elapsed_ms(start)
            status_code = response.get("status_code", 500)
            identity = _late_identity(scope, context)
            logger.log(
                log_level_for_status(status_code),
                "HTTP request finished",
                url=url,
                status_code=status_code,
                elapsed_ms=elapsed_ms,
                response_content_type=response.get("content_type"),
                response_content_length=response.get("content_length"),
                **identity,
            )

    @staticmethod
    def _log_failure(
        url: str,
        start: float,
        exc: BaseException,
        kind: FailureKind,
    ) -> None:
        elapsed_ms = _elapsed_ms(start)
        exception_type = type(exc).__name__
        logger.error(
            "HTTP request failed",
            url=url,
            elapsed_ms=elapsed_ms,
            exception_type=exception_type,
            exception_source=_exception_source(exc.__traceback__),
            failure_kind=kind.value,
            exc_info=exc,
        )


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def _late_identity(scope: Scope, context: RequestContext) -> Dict[str, str]:
    """user/session ids that inner middleware attached after we started"""
    identity = {}
    if context.user_id is None:
        user_id = resolve_user_id(scope)
        if user_id:
            identity["user_id"] = user_id
    if context.session_id is None:
        session_id = resolve_session_id(scope)
        if session_id:
            identity["session_id"] = session_id
    return identity


def _exception_source(tb: Optional[TracebackType]) -> Optional[str]:
    """module in which the exception was raised"""
    if tb is None:
        return None
    while tb.tb_next is not None:
        tb = tb.tb_next
    return tb.tb_frame.f_globals.get("__name__")
