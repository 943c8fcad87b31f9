"""Tests for request fact resolution (ids, client ip, log level)."""

import logging
import uuid

import pytest
from starlette.authentication import SimpleUser, UnauthenticatedUser
from starlette.datastructures import Headers
from starlette.requests import Request

from ecommerce_api.observability.request_context import (
    RequestContext,
    log_level_for_status,
    parse_content_length,
    resolve_client_ip,
    resolve_correlation_id,
    resolve_session_id,
    resolve_user_id,
)


def make_scope(headers=None, path="/api/v1/orders", query=b"", method="GET", **extra):
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": query,
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "client": ("10.0.0.7", 51234),
        "server": ("testserver", 80),
    }
    scope.update(extra)
    return scope


@pytest.mark.parametrize(
    "status_code,level",
    [
        (200, logging.INFO),
        (201, logging.INFO),
        (399, logging.INFO),
        (400, logging.WARNING),
        (404, logging.WARNING),
        (499, logging.WARNING),
        (500, logging.ERROR),
        (503, logging.ERROR),
    ],
)
def test_log_level_for_status(status_code, level):
    assert log_level_for_status(status_code) == level


class TestClientIp:

    def test_forwarded_for_wins_over_real_ip(self):
        headers = Headers({"X-Forwarded-For": "1.2.3.4, 5.6.7.8", "X-Real-IP": "9.9.9.9"})
        assert resolve_client_ip(headers, "10.0.0.7") == "1.2.3.4"

    def test_forwarded_for_entry_is_trimmed(self):
        headers = Headers({"X-Forwarded-For": "   1.2.3.4 ,5.6.7.8"})
        assert resolve_client_ip(headers, None) == "1.2.3.4"

    def test_real_ip_fallback(self):
        headers = Headers({"X-Real-IP": "9.9.9.9"})
        assert resolve_client_ip(headers, "10.0.0.7") == "9.9.9.9"

    def test_connection_address_fallback(self):
        assert resolve_client_ip(Headers({}), "10.0.0.7") == "10.0.0.7"

    def test_unknown_without_any_source(self):
        assert resolve_client_ip(Headers({}), None) == "unknown"


class TestCorrelationId:

    def test_inbound_value_is_kept(self):
        headers = Headers({"X-Correlation-ID": "abc-123"})
        assert resolve_correlation_id(headers) == "abc-123"

    def test_header_lookup_is_case_insensitive(self):
        headers = Headers({"x-correlation-id": "abc-123"})
        assert resolve_correlation_id(headers) == "abc-123"

    @pytest.mark.parametrize("headers", [{}, {"X-Correlation-ID": ""}, {"X-Correlation-ID": "   "}])
    def test_generated_when_missing_or_blank(self, headers):
        generated = resolve_correlation_id(Headers(headers))
        assert uuid.UUID(generated).version == 4

    def test_generated_ids_are_distinct(self):
        assert resolve_correlation_id(Headers({})) != resolve_correlation_id(Headers({}))


class TestIdentity:

    def test_authenticated_user(self):
        assert resolve_user_id({"user": SimpleUser("alice")}) == "alice"

    def test_anonymous_user(self):
        assert resolve_user_id({"user": UnauthenticatedUser()}) is None

    def test_no_auth_middleware(self):
        assert resolve_user_id({}) is None

    def test_session_id(self):
        assert resolve_session_id({"session": {"session_id": "s-1"}}) == "s-1"
        assert resolve_session_id({"session": {}}) is None
        assert resolve_session_id({}) is None


@pytest.mark.parametrize("raw,parsed", [("128", 128), (None, None), ("abc", None)])
def test_parse_content_length(raw, parsed):
    assert parse_content_length(raw) == parsed


def test_context_from_request():
    request = Request(
        make_scope(
            headers={
                "Host": "shop.example.com",
                "User-Agent": "pytest-agent",
                "Content-Type": "application/json",
                "Content-Length": "42",
                "X-Real-IP": "9.9.9.9",
            },
            method="POST",
            query=b"dry_run=1",
            user=SimpleUser("bob"),
        )
    )

    context = RequestContext.from_request(request, request_id="req-1", correlation_id="corr-1")
    fields = context.as_log_fields()

    assert fields == {
        "request_id": "req-1",
        "correlation_id": "corr-1",
        "trace_id": None,
        "span_id": None,
        "user_agent": "pytest-agent",
        "remote_ip": "9.9.9.9",
        "protocol": "HTTP/1.1",
        "method": "POST",
        "scheme": "http",
        "host": "shop.example.com",
        "path": "/api/v1/orders",
        "query_string": "dry_run=1",
        "content_type": "application/json",
        "content_length": 42,
        "user_id": "bob",
        "session_id": None,
    }
