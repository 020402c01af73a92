"""
Application Errors and Exception Handlers

Route handlers raise a ``BookstoreError`` subclass; the handlers registered
here turn it into the ``{"message": ...}`` envelope and log the underlying
cause. The client sees the envelope, the server log sees the error.

Status Codes
============
Each error kind carries two status codes. Which one is used depends on
``Settings.legacy_status_codes``:

    error kind               legacy   strict
    ---------------------    ------   ------
    InvalidIdError            500      400
    BookNotFoundError         400      404
    MalformedIdError          400      400
    DatabaseOperationError    400      500

A request body that fails validation is 422 in both modes.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

REQUEST_FAILED_MESSAGE = "request failed"


# =============================================================================
# Error Types
# =============================================================================
class BookstoreError(Exception):
    """
    Base class for errors raised by route handlers.

    Attributes:
        message: Text placed in the response envelope
        legacy_status_code: Status used when legacy codes are enabled
        strict_status_code: Status used otherwise
    """

    legacy_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    strict_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    log_level = logging.ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def status_code(self, legacy: bool) -> int:
        return self.legacy_status_code if legacy else self.strict_status_code


class InvalidIdError(BookstoreError):
    """The ``id`` path parameter was empty."""

    legacy_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    strict_status_code = status.HTTP_400_BAD_REQUEST
    log_level = logging.WARNING


class BookNotFoundError(BookstoreError):
    """No row matched the requested id."""

    legacy_status_code = status.HTTP_400_BAD_REQUEST
    strict_status_code = status.HTTP_404_NOT_FOUND
    log_level = logging.WARNING


class MalformedIdError(BookstoreError):
    """The ``id`` path parameter is not an integer, so it cannot name a row."""

    legacy_status_code = status.HTTP_400_BAD_REQUEST
    strict_status_code = status.HTTP_400_BAD_REQUEST
    log_level = logging.WARNING


class DatabaseOperationError(BookstoreError):
    """An insert, query or delete failed inside the database layer."""

    legacy_status_code = status.HTTP_400_BAD_REQUEST
    strict_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# =============================================================================
# Exception Handlers
# =============================================================================
async def bookstore_error_handler(request: Request, exc: BookstoreError) -> JSONResponse:
    legacy = request.app.state.settings.legacy_status_codes
    status_code = exc.status_code(legacy)

    cause = exc.__cause__
    if cause is not None:
        logger.log(
            exc.log_level,
            "%s %s -> %d %s: %s",
            request.method,
            request.url.path,
            status_code,
            exc.message,
            cause,
        )
    else:
        logger.log(
            exc.log_level,
            "%s %s -> %d %s",
            request.method,
            request.url.path,
            status_code,
            exc.message,
        )

    return JSONResponse(status_code=status_code, content={"message": exc.message})


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Render request validation failures in the message envelope.

    Covers bodies that are not JSON, not an object, or carry a value of
    the wrong type. The validation details only go to the log.
    """
    logger.warning(
        "%s %s -> 422 %s: %s",
        request.method,
        request.url.path,
        REQUEST_FAILED_MESSAGE,
        exc.errors(),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": REQUEST_FAILED_MESSAGE},
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Unknown paths and wrong methods also answer with ``{message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError,
) -> JSONResponse:
    """
    Handle database errors that escaped a route handler.

    Logs the actual error while hiding details from users unless debug
    mode is on.
    """
    logger.error(f"Database error: {exc}")
    message = "a database error occurred"
    if request.app.state.settings.debug:
        message = str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": message},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error: {exc}", exc_info=True)
    message = "an internal error occurred"
    if request.app.state.settings.debug:
        message = str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookstoreError, bookstore_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
