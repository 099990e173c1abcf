"""
Global exception handlers for the API layer.

These handlers transform exceptions raised below the API layer into HTTP
responses, so endpoints need no try/except of their own:

- undecodable or empty payloads (BadRequest) -> 400
- MalformedAddress anywhere in a batch -> 500 for the whole batch
- anything else derived from AppException -> 500
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from rkn_checker.core.exceptions import (
    AppException,
    MalformedAddress,
    ValidationError,
)
from rkn_checker.utils.logger import get_logger

logger = get_logger(__name__)


async def validation_exception_handler(
        request: Request, exc: ValidationError
) -> JSONResponse:
    """
    Handle ValidationError (BadRequest and friends).
    Maps to HTTP 400 Bad Request.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


async def malformed_address_exception_handler(
        request: Request, exc: MalformedAddress
) -> JSONResponse:
    """
    Handle MalformedAddress raised while checking a batch.
    Maps to HTTP 500; no partial results are returned.
    """
    logger.warning(f"check failed: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": exc.message},
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Fallback handler for any AppException that wasn't caught by more specific handlers.
    Maps to HTTP 500 Internal Server Error.
    """
    logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": exc.message},
    )


# Dictionary mapping exception types to their handlers
# Registered all at once in main.py
EXCEPTION_HANDLERS = {
    ValidationError: validation_exception_handler,
    MalformedAddress: malformed_address_exception_handler,
    AppException: app_exception_handler,
}
