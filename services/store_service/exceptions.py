"""Store error taxonomy and its HTTP translation.

Service functions raise these; the handlers registered in `register_error_handlers`
turn them into user-safe JSON bodies. Internal detail goes to the log only.
"""

from typing import Iterable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from libs.common.logging import get_logger

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An internal error occurred. Please try again later."


class StoreError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "STORE_ERROR"
    public_message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)
        if message is not None:
            self.public_message = message

    def to_body(self) -> dict:
        return {"detail": self.public_message, "code": self.code}


class ValidationError(StoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    public_message = "Invalid request."


class NotFoundError(StoreError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    public_message = "Not found."


class OwnershipError(NotFoundError):
    """Caller does not own the order. Rendered exactly like NotFoundError."""


class ProductUnavailableError(StoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "PRODUCT_UNAVAILABLE"

    def __init__(self, product_ids: Iterable[int]):
        self.product_ids = sorted(set(product_ids))
        joined = ", ".join(str(pid) for pid in self.product_ids)
        super().__init__(f"Product(s) no longer available: {joined}")

    def to_body(self) -> dict:
        body = super().to_body()
        body["product_ids"] = self.product_ids
        return body


class PersistenceError(StoreError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "PERSISTENCE_ERROR"
    public_message = "Your order could not be processed. Please try again later."


class NotificationError(StoreError):
    """Email delivery failed. Logged by the dispatcher, never sent to clients."""

    code = "NOTIFICATION_ERROR"


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    if isinstance(exc, OwnershipError):
        # Same body as a missing order so existence does not leak
        body = NotFoundError("Order not found").to_body()
    else:
        body = exc.to_body()
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": ValidationError.public_message,
            "code": ValidationError.code,
            "errors": errors,
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_ERROR_MESSAGE, "code": StoreError.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
