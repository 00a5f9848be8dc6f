"""
HTTP middleware for request tracing.

CorrelationMiddleware binds an ``X-Correlation-ID`` (taken from the request or
freshly generated) to the current context and echoes it on the response.
RequestLoggingMiddleware writes one access log line per request with timing.

WebSocket traffic bypasses both; the delivery coordinator logs per event.

Dependencies: starlette, newsbot.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from newsbot.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log with status code and latency."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        context = {"method": request.method, "path": request.url.path}

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{__name__}:dispatch - {context['method']} {context['path']} raised {type(e).__name__}",
                extra={**context, "process_time_ms": _elapsed_ms(started)},
            )
            raise

        logger.info(
            f"{__name__}:dispatch - {context['method']} {context['path']} -> {response.status_code}",
            extra={
                **context,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(started),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Propagate the correlation ID through the request context."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
