"""Map store errors onto HTTP responses.

Body shape: ``{"error": {"code": ..., "message": ..., <details>}}``.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from grocery.errors import (
    EmptyCart,
    InsufficientStock,
    Internal,
    InvalidArgument,
    NotFound,
    StoreError,
    Unavailable,
    from_validation_error,
)

ERROR_STATUS_CODES = {
    InvalidArgument: 400,
    NotFound: 404,
    EmptyCart: 409,
    InsufficientStock: 409,
    Unavailable: 503,
    Internal: 500,
}


def _response(exc: StoreError) -> JSONResponse:
    headers = {"Retry-After": "1"} if exc.retryable else None
    return JSONResponse(
        status_code=ERROR_STATUS_CODES.get(type(exc), 500),
        content={"error": exc.details()},
        headers=headers,
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return _response(exc)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Field validation raised while building a Protean command."""
    return _response(from_validation_error(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
