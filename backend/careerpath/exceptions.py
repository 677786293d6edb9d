"""
Application exceptions and their HTTP mapping.

Taxonomy:
    ValidationFailed   400  malformed or out-of-range input, never retried
    SaveFailed         400  store constraint violation (duplicate, missing FK)
    InvalidTransition  409  enrollment state change that is not allowed
    StoreUnavailable   503  database unreachable; the client retries

Absence (no profile, no assessment) is not an error and never raised.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class CareerPathError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationFailed(CareerPathError):
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


class SaveFailed(CareerPathError):
    def __init__(self, message: str = "Failed to save", details: dict = None):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


class InvalidTransition(CareerPathError):
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=status.HTTP_409_CONFLICT, details=details)


class StoreUnavailable(CareerPathError):
    def __init__(self, message: str = "Database unavailable"):
        super().__init__(message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


def _error_body(message: str, details: dict = None) -> dict:
    body = {"message": message}
    if details:
        body["details"] = details
    return body


async def careerpath_exception_handler(request: Request, exc: CareerPathError):
    logger.warning(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.details))


def _describe(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "; ".join(_describe(e) for e in errors) or "Invalid request"
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": message,
            "errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors],
        },
    )


async def database_exception_handler(request: Request, exc: DBAPIError):
    if isinstance(exc, IntegrityError):
        failed = SaveFailed()
        logger.warning(f"Constraint violation on {request.url.path}: {exc.orig}")
        return JSONResponse(status_code=failed.status_code, content=_error_body(failed.message))

    logger.error(f"Database error on {request.url.path}: {exc}")
    unavailable = StoreUnavailable()
    return JSONResponse(status_code=unavailable.status_code, content=_error_body(unavailable.message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(CareerPathError, careerpath_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DBAPIError, database_exception_handler)
