"""
FastAPI middleware for observability.

Correlation ID propagation and per-request access logging. Access log lines
carry the caller's identity and the rate-limit outcome reported by the
route, and their level follows the response class (5xx error, 429 and other
4xx warning, otherwise info).

Dependencies: fastapi, starlette, concierge.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from concierge.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

QUIET_PATHS = ("/api/v1/health",)


def request_client(request: Request) -> str:
    """First X-Forwarded-For hop, else the peer host."""
    forwarded = request.headers.get("x-forwarded-for", "").split(",")[0].strip()
    if forwarded:
        return forwarded
    return request.client.host if request.client else "unknown"


def response_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log with client identity, timing and rate-limit outcome."""

    def __init__(self, app, quiet_paths: tuple[str, ...] = QUIET_PATHS) -> None:
        super().__init__(app)
        self.quiet_paths = quiet_paths

    async def dispatch(self, request: Request, call_next):
        """
        Log one line per request once the response is ready.

        Successful requests to quiet paths (health probes) are not logged.
        """
        started = time.perf_counter()
        client = request_client(request)
        route = f"{request.method} {request.url.path}"

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{__name__}:dispatch - {route} client={client} failed: {type(e).__name__}",
                extra={"client": client, "elapsed_ms": round((time.perf_counter() - started) * 1000, 1)},
            )
            raise

        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        if response.status_code < 400 and request.url.path.startswith(self.quiet_paths):
            return response

        rate_remaining = response.headers.get("X-RateLimit-Remaining")
        message = f"{__name__}:dispatch - {route} {response.status_code} client={client} {elapsed_ms}ms"
        if rate_remaining is not None:
            message += f" rate_remaining={rate_remaining}"
        if response.status_code == 429:
            message += f" retry_after={response.headers.get('Retry-After')}"

        logger.log(
            response_level(response.status_code),
            message,
            extra={
                "client": client,
                "status_code": response.status_code,
                "elapsed_ms": elapsed_ms,
                "rate_remaining": rate_remaining,
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware for correlation ID injection."""

    async def dispatch(self, request: Request, call_next):
        """Set the request's correlation ID and echo it in X-Correlation-ID."""
        correlation_id = set_correlation_id(request.headers.get("X-Correlation-ID"))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers["X-Correlation-ID"] = correlation_id
        return response
