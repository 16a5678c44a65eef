# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.domain.errors import (
    StorefrontError,
    Unauthorized,
    NotFound,
    InvalidInput,
    EmptyCart,
    CartBusy,
    GatewayNotConfigured,
    GatewayError,
    SessionUnresolved,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

STATUS_CODES = {
    Unauthorized: 403,
    NotFound: 404,
    InvalidInput: 400,
    EmptyCart: 409,
    CartBusy: 409,
    GatewayNotConfigured: 409,
    SessionUnresolved: 409,
    GatewayError: 502,
}


def status_for(exc: StorefrontError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 400


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
