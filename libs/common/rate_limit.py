"""Rate limiting configuration for the store API.

Uses slowapi with a fixed-window strategy keyed by client IP. The limiter is
shared because slowapi binds it at decoration time; limit strings and the
on/off switch are read per request from the serving app's Settings.
"""

from contextvars import ContextVar
from typing import Optional

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from libs.common.config import Settings, get_settings

_request_settings: ContextVar[Optional[Settings]] = ContextVar(
    "rate_limit_settings", default=None
)


def get_client_ip(request: Request) -> str:
    """
    Get client IP from request, handling proxies.

    Checks X-Forwarded-For header first (for proxied requests),
    then falls back to direct connection IP.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain (original client)
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


def _rate_limit_key(request: Request) -> str:
    return f"ip:{get_client_ip(request)}"


limiter = Limiter(key_func=_rate_limit_key, strategy="fixed-window")


async def bind_rate_limits(request: Request) -> None:
    """Route dependency exposing the app's Settings to the limit callables."""
    _request_settings.set(request.app.state.settings)


def _active_settings() -> Settings:
    return _request_settings.get() or get_settings()


def rate_limit_disabled(request: Request) -> bool:
    return not request.app.state.settings.RATE_LIMIT_ENABLED


def orders_limit() -> str:
    return _active_settings().ORDER_RATE_LIMIT


def contact_limit() -> str:
    return _active_settings().CONTACT_RATE_LIMIT


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    Custom handler for rate limit exceeded errors.

    Returns a JSON response with clear error message and retry-after header.
    """
    window = exc.detail.split("per")[-1].strip() if exc.detail else "1 minute"

    return JSONResponse(
        status_code=429,
        content={
            "detail": f"Rate limit exceeded. Try again in {window}.",
            "code": "RATE_LIMIT_EXCEEDED",
        },
        headers={"Retry-After": "60"},
    )
