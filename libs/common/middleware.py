"""Request observability for the store API.

Every request gets an id (taken from `X-Request-ID` when the caller sends
one), bound to the logging context and echoed back in the response. Start
and end of each request are logged with the client IP, status and duration.
"""
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from libs.common.config import Settings
from libs.common.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)
from libs.common.rate_limit import get_client_ip

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = frozenset({"/health", "/docs", "/openapi.json"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the log context and log the request lifecycle."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            path=request.url.path,
            method=request.method,
        )
        request.state.request_id = request_id
        verbose = request.url.path not in QUIET_PATHS
        started = time.perf_counter()

        if verbose:
            logger.info(
                "Request started",
                extra={
                    "extra_fields": {
                        "client_ip": get_client_ip(request),
                        "query": request.url.query or None,
                    }
                },
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed with unhandled exception",
                extra={
                    "extra_fields": {
                        "error_type": type(e).__name__,
                        "duration_ms": _elapsed_ms(started),
                    }
                },
            )
            clear_request_context()
            raise

        if verbose:
            level = "warning" if response.status_code >= 400 else "info"
            getattr(logger, level)(
                f"Request completed with {response.status_code}",
                extra={
                    "extra_fields": {
                        "status_code": response.status_code,
                        "duration_ms": _elapsed_ms(started),
                    }
                },
            )
        clear_request_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def add_observability_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure logging from settings and install the request middleware."""
    configure_logging(settings)
    app.add_middleware(RequestContextMiddleware)
    logger.info(f"Observability middleware initialized for {settings.SERVICE_NAME}")
