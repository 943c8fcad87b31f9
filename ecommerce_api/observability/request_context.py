"""
Per-request facts attached to every log record of a request
"""
import logging
import uuid
from typing import Any, Dict, Mapping, Optional, Tuple

from opentelemetry import trace
from pydantic import BaseModel, Field
from starlette.requests import Request
from starlette.types import Scope

CORRELATION_HEADER = "X-Correlation-ID"
FORWARDED_FOR_HEADER = "X-Forwarded-For"
REAL_IP_HEADER = "X-Real-IP"

UNKNOWN_IP = "unknown"


class RequestContext(BaseModel):
    """
    Enrichment properties of one request.

    Field names are consumed by downstream log processors and must stay
    stable.
    """
    request_id: str = Field(..., description="Server-generated request id")
    correlation_id: str = Field(..., description="Client-supplied or generated correlation id")
    trace_id: Optional[str] = Field(None, description="Active trace id, if any")
    span_id: Optional[str] = Field(None, description="Active span id, if any")
    user_agent: Optional[str] = None
    remote_ip: str = UNKNOWN_IP
    protocol: Optional[str] = None
    method: str
    scheme: Optional[str] = None
    host: Optional[str] = None
    path: str
    query_string: Optional[str] = None
    content_type: Optional[str] = None
    content_length: Optional[int] = None
    user_id: Optional[str] = None
    session_id: Optional[str] = None

    @classmethod
    def from_request(
        cls,
        request: Request,
        request_id: str,
        correlation_id: str,
    ) -> "RequestContext":
        """Collect request facts from an incoming request"""
        headers = request.headers
        trace_id, span_id = current_trace_ids()
        client_host = request.client.host if request.client else None

        return cls(
            request_id=request_id,
            correlation_id=correlation_id,
            trace_id=trace_id,
            span_id=span_id,
            user_agent=headers.get("user-agent"),
            remote_ip=resolve_client_ip(headers, client_host),
            protocol=f"HTTP/{request.scope.get('http_version', '1.1')}",
            method=request.method,
            scheme=request.url.scheme,
            host=headers.get("host"),
            path=request.url.path,
            query_string=request.url.query or None,
            content_type=headers.get("content-type"),
            content_length=parse_content_length(headers.get("content-length")),
            user_id=resolve_user_id(request.scope),
            session_id=resolve_session_id(request.scope),
        )

    def as_log_fields(self) -> Dict[str, Any]:
        """fields to bind into the logging context"""
        return self.model_dump()


def resolve_correlation_id(headers: Mapping[str, str]) -> str:
    """
    Take the inbound correlation id, or generate one

    Args:
        headers: Request headers (case-insensitive mapping)

    Returns:
        Inbound header value if present and non-blank, else a new UUID4
    """
    inbound = (headers.get(CORRELATION_HEADER) or "").strip()
    return inbound or str(uuid.uuid4())


def resolve_client_ip(headers: Mapping[str, str], client_host: Optional[str]) -> str:
    """
    Client address, honouring proxies

    Precedence: first entry of X-Forwarded-For, then X-Real-IP, then the
    connection peer address.
    """
    forwarded_for = headers.get(FORWARDED_FOR_HEADER)
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    real_ip = (headers.get(REAL_IP_HEADER) or "").strip()
    if real_ip:
        return real_ip

    return client_host or UNKNOWN_IP


def resolve_user_id(scope: Scope) -> Optional[str]:
    """authenticated user id, if an auth middleware populated the scope"""
    user = scope.get("user")
    if user is None or not getattr(user, "is_authenticated", False):
        return None

    for attribute in ("identity", "display_name"):
        try:
            value = getattr(user, attribute, None)
        except NotImplementedError:
            continue
        if value:
            return str(value)
    return None


def resolve_session_id(scope: Scope) -> Optional[str]:
    """session id, if a session middleware populated the scope"""
    session = scope.get("session")
    if not session:
        return None
    value = session.get("session_id") or session.get("id")
    return str(value) if value else None


def current_trace_ids() -> Tuple[Optional[str], Optional[str]]:
    """ids of the active span, (None, None) without an active trace"""
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None, None
    return (
        trace.format_trace_id(span_context.trace_id),
        trace.format_span_id(span_context.span_id),
    )


def parse_content_length(value: Optional[str]) -> Optional[int]:
    """Content-Length header as int, None when absent or malformed"""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def log_level_for_status(status_code: int) -> int:
    """
    Log level for a completed request

    >= 500 -> ERROR, >= 400 -> WARNING, otherwise INFO
    """
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO
