"""Application error taxonomy and FastAPI exception handlers."""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.config import get_settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """Uniqueness violation on username or email."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    """Bad credentials or a missing, invalid or expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidTokenError(AuthError):
    """Token signature, shape or expiry check failed."""


class ForbiddenError(AppError):
    """Authenticated, but not allowed to touch the target resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report framework-level body/param validation failures as 400s."""
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return await app_error_handler(request, ValidationError(message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn anything unrecognized into an InternalError response."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    content: dict[str, str] = InternalError(str(exc) or exc.__class__.__name__).to_dict()
    if not get_settings().is_production:
        content["details"] = "".join(traceback.format_exception(exc))
    return JSONResponse(status_code=InternalError.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error taxonomy on an application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
