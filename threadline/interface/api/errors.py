"""Mapping of domain and infrastructure errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from threadline.domain.error import (
    DependencyUnavailableError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)

_STATUS_BY_ERROR: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    DependencyUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def _domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Subclasses (e.g. adapter errors) resolve through their domain base
    status_code = next(
        code
        for error_type, code in _STATUS_BY_ERROR.items()
        if isinstance(exc, error_type)
    )

    if status_code >= 500:
        logfire.error(
            "Dependency unavailable", path=request.url.path, error=str(exc)
        )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def _database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logfire.error(
        "Database error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Comment store unavailable"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers on the application.

    Args:
        app: FastAPI application
    """
    for error_type in _STATUS_BY_ERROR:
        app.add_exception_handler(error_type, _domain_error_handler)
    app.add_exception_handler(DBAPIError, _database_error_handler)
