"""
Exception handlers mapping domain errors to HTTP responses.

Every domain error becomes a JSON body of the form
`{"detail": ..., "error_code": ..., "path": ...}`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    UnprocessableReferenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnprocessableReferenceError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConflictError: status.HTTP_409_CONFLICT,
}


def status_for(exc: DomainError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Convert a DomainError into a consistent API response"""
    status_code = status_for(exc)
    logger.warning("%s at %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": str(exc),
            "error_code": exc.error_code,
            "path": str(request.url.path),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the domain exception handler with the FastAPI app"""
    app.add_exception_handler(DomainError, handle_domain_error)
