"""
Application error taxonomy and its translation to HTTP responses.

Repositories and route handlers raise these errors; the handlers registered
by `register_exception_handlers` are the only place they become HTTP
responses. Every error body has the shape:

    {"error": {"message": ..., "status": ...}}
"""

import logging
from typing import Any, List, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class JoblyError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: Union[str, List[str]] = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(JoblyError):
    """Invalid input, duplicate entity, or a contradictory filter."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: Union[str, List[str]] = "Bad Request"):
        super().__init__(message)


class NotFoundError(JoblyError):
    """Missing key on get/update/delete, or an unknown route."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class UnauthorizedError(JoblyError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(JoblyError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


def error_body(message: Any, status_code: int) -> dict:
    return {"error": {"message": message, "status": status_code}}


def validation_messages(errors: List[dict]) -> List[str]:
    """Flatten pydantic error dicts into `"field.path: message"` strings."""
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        prefix = ".".join(loc)
        messages.append(f"{prefix}: {err['msg']}" if prefix else err["msg"])
    return messages


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.status_code),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(validation_messages(exc.errors()), status.HTTP_400_BAD_REQUEST),
    )


async def pydantic_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(validation_messages(exc.errors()), status.HTTP_400_BAD_REQUEST),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(str(exc) or "Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error-to-HTTP translation on the application."""
    app.add_exception_handler(JoblyError, jobly_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
