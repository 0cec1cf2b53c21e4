"""Translate domain errors into HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from agora.domain.error import (
    ConflictError,
    DomainError,
    InvalidInputError,
    NotFoundError,
    StorageError,
)

# Most specific first; DomainError is the fallback
ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (DomainError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(error: DomainError) -> int:
    """Pick the HTTP status code for a domain error."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)

    if status_code >= 500:
        logfire.error(
            "Request failed",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
    else:
        logfire.warn(
            "Request rejected",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )

    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handler on the application."""
    app.add_exception_handler(DomainError, handle_domain_error)
