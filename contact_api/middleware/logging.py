"""Request logging middleware with correlation ID support."""

import logging
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from contact_api.logging.config import get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Request-ID"


def get_or_generate_correlation_id(request: Request) -> str:
    """
    Extract or generate a correlation ID for the request.

    Args:
        request: The incoming request

    Returns:
        The correlation ID (from request state, header or newly generated)
    """
    existing = getattr(request.state, "correlation_id", None)
    if existing:
        return existing
    return request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())


def _request_context(request: Request) -> dict:
    # Bodies carry personal data and are never logged
    return {
        "method": request.method,
        "path": request.url.path,
        "origin": request.headers.get("origin"),
    }


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every request with a correlation ID and echo it as X-Request-ID.

    Completions with a 5xx status are logged at WARNING so failed
    submissions (503 database unavailable, 500 write failure) stand out.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = get_or_generate_correlation_id(request)
        request.state.correlation_id = correlation_id
        context = _request_context(request)

        logger.info(
            "Request started",
            extra={
                "correlation_id": correlation_id,
                "context": {
                    **context,
                    "client_host": request.client.host if request.client else None,
                },
            },
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                exc_info=exc,
                extra={
                    "correlation_id": correlation_id,
                    "context": {**context, "response_time_ms": _elapsed_ms(started)},
                },
            )
            raise

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "Request completed",
            extra={
                "correlation_id": correlation_id,
                "context": {
                    **context,
                    "status_code": response.status_code,
                    "response_time_ms": _elapsed_ms(started),
                },
            },
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
