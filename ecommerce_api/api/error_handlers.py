"""
Outermost error boundary
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ecommerce_api.models.responses import ErrorResponse
from ecommerce_api.observability.request_context import CORRELATION_HEADER


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic 500 response for any unhandled exception

    The exception is already logged by CorrelationMiddleware; its details
    never reach the client.
    """
    response = JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            message="An unexpected error occurred"
        ).model_dump(exclude_none=True)
    )
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        response.headers[CORRELATION_HEADER] = correlation_id
    return response


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, unhandled_exception_handler)
