"""
Centralized exception handlers for the FastAPI application.

Domain exceptions are mapped to HTTP status codes and rendered in the
uniform response envelope:

    {
        "success": false,
        "message": "Human-readable error message",
        "message_code": "MACHINE_READABLE_ERROR_CODE"
    }
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DeliveryError,
    ExternalServiceError,
    FirstmakersError,
    NotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# Codes whose status differs from their exception category
CODE_TO_STATUS: dict[str, int] = {
    "MISSING_TOKEN": status.HTTP_403_FORBIDDEN,
}

# Checked in order; subclasses before their bases
TYPE_TO_STATUS: list[tuple[type[FirstmakersError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (DeliveryError, status.HTTP_502_BAD_GATEWAY),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
]


def get_status_for_exception(exc: FirstmakersError) -> int:
    """Determine HTTP status code for a domain exception."""
    if exc.code in CODE_TO_STATUS:
        return CODE_TO_STATUS[exc.code]
    for exc_type, status_code in TYPE_TO_STATUS:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    """Create a standardized error response."""
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "message_code": code},
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application."""

    @app.exception_handler(FirstmakersError)
    async def domain_exception_handler(request: Request, exc: FirstmakersError) -> JSONResponse:
        status_code = get_status_for_exception(exc)

        if isinstance(exc, ExternalServiceError):
            logger.error(
                "External service failure on %s %s: %s (code=%s, details=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code,
                exc.details,
            )
        else:
            logger.warning(
                "Domain exception on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code,
            )

        return error_response(status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
        message = f"Must provide valid {', '.join(fields)}." if fields else "Invalid request."
        return error_response(status.HTTP_400_BAD_REQUEST, message, "MISSING_FIELDS")
