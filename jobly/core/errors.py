"""
Domain exception hierarchy and its mapping onto HTTP responses.

The data-access layer raises these; a single FastAPI exception handler turns
them into ``{"detail": message}`` JSON bodies with the matching status code.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class JoblyError(Exception):
    """Base application exception."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class BadRequestError(JoblyError):
    """The request data is unusable (duplicates, unknown references, ...)."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class InvalidInputError(BadRequestError):
    """A partial update was requested with nothing to update."""


class InvalidRangeError(BadRequestError):
    """A filter's lower bound is greater than its upper bound."""


class UnauthorizedError(JoblyError):
    """Missing or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(JoblyError):
    """Raised when a requested resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class EmptyResultError(NotFoundError):
    """A valid filter matched no rows."""


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    """Render a domain error as a JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JoblyError, jobly_error_handler)


__all__ = [
    "BadRequestError",
    "EmptyResultError",
    "InvalidInputError",
    "InvalidRangeError",
    "JoblyError",
    "NotFoundError",
    "UnauthorizedError",
    "register_exception_handlers",
]
