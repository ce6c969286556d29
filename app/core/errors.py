from __future__ import annotations

import logging

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger("app.errors")

BAD_REQUEST_MESSAGE = "Bad request."
PATH_NOT_FOUND_MESSAGE = "Path not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"
USER_NOT_FOUND_MESSAGE = "User with provided username is not found"
COMMENT_AUTHOR_CONSTRAINT = "comments_author_fkey"


class ApiError(Exception):
    """Failure that carries the HTTP status and message sent to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidQuery(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.warning(
        "Request rejected",
        extra={
            "event": "api_error",
            "path": request.url.path,
            "status_code": exc.status_code,
            "error": type(exc).__name__,
            "detail": exc.message,
        },
    )
    return _message(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(
        "Request validation failed",
        extra={"event": "request_invalid", "path": request.url.path, "errors": exc.errors()},
    )
    return _message(status.HTTP_400_BAD_REQUEST, BAD_REQUEST_MESSAGE)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Known path with an unregistered method is still an unmatched route
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return _message(status.HTTP_404_NOT_FOUND, PATH_NOT_FOUND_MESSAGE)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def foreign_key_error_handler(request: Request, exc: asyncpg.ForeignKeyViolationError) -> JSONResponse:
    # The author check and the insert are not atomic with user deletion
    if getattr(exc, "constraint_name", None) == COMMENT_AUTHOR_CONSTRAINT:
        logger.warning(
            "Comment author vanished before insert",
            extra={"event": "comment_author_missing", "path": request.url.path},
        )
        return _message(status.HTTP_404_NOT_FOUND, USER_NOT_FOUND_MESSAGE)
    return await unhandled_error_handler(request, exc)


async def out_of_range_error_handler(request: Request, exc: asyncpg.NumericValueOutOfRangeError) -> JSONResponse:
    # votes + inc_votes overflowed the int4 column
    logger.warning(
        "Value out of column range",
        extra={"event": "value_out_of_range", "path": request.url.path},
    )
    return _message(status.HTTP_400_BAD_REQUEST, BAD_REQUEST_MESSAGE)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        extra={"event": "unhandled_error", "path": request.url.path},
        exc_info=exc,
    )
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(asyncpg.ForeignKeyViolationError, foreign_key_error_handler)
    app.add_exception_handler(asyncpg.NumericValueOutOfRangeError, out_of_range_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
