"""
Single error taxonomy for the API.

Services raise `ApiError(ErrorKind.X, ...)`; the handlers installed by
`install_exception_handlers()` turn it (and backend failures) into
`{"error": <kind>, "detail": <message>}` responses. `log_detail` is for the
server log only and never reaches the client.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BAD_REQUEST = "bad_request"
    DATABASE_ERROR = "database_error"
    DATABASE_TIMEOUT = "database_timeout"
    INTERNAL_SERVER_ERROR = "internal_server_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.MISSING_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.EXPIRED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.DATABASE_TIMEOUT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.MISSING_TOKEN: "Missing Authorization header.",
    ErrorKind.INVALID_TOKEN: "Invalid access token.",
    ErrorKind.EXPIRED_TOKEN: "Access token has expired.",
    ErrorKind.INVALID_CREDENTIALS: "Invalid name or password.",
    ErrorKind.UNAUTHORIZED: "Not allowed to access this resource.",
    ErrorKind.NOT_FOUND: "Resource not found.",
    ErrorKind.CONFLICT: "Resource already exists.",
    ErrorKind.BAD_REQUEST: "Malformed request.",
    ErrorKind.DATABASE_ERROR: "Database error.",
    ErrorKind.DATABASE_TIMEOUT: "Database is busy, retry later.",
    ErrorKind.INTERNAL_SERVER_ERROR: "Internal server error.",
}

# Authentication failures advertise the expected scheme.
_AUTH_KINDS = frozenset(
    {
        ErrorKind.MISSING_TOKEN,
        ErrorKind.INVALID_TOKEN,
        ErrorKind.EXPIRED_TOKEN,
    }
)

_READ_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class ApiError(Exception):
    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        log_detail: str | None = None,
    ) -> None:
        self.kind = kind
        self.message = message or kind.default_message
        self.log_detail = log_detail
        super().__init__(f"{kind.value}: {self.message}")

    @property
    def status_code(self) -> int:
        return self.kind.status_code


def error_response(
    kind: ErrorKind,
    message: str | None = None,
    *,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {"error": kind.value, "detail": message or kind.default_message}
    if extra:
        body.update(extra)

    headers: dict[str, str] = {}
    if kind in _AUTH_KINDS:
        headers["WWW-Authenticate"] = "Bearer"
    if kind is ErrorKind.DATABASE_TIMEOUT:
        headers["Retry-After"] = "1"
    return JSONResponse(status_code=kind.status_code, content=body, headers=headers or None)


async def _handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "api_error kind=%s method=%s path=%s detail=%s",
            exc.kind.value,
            request.method,
            request.url.path,
            exc.log_detail or exc.message,
        )
    else:
        logger.info(
            "api_error kind=%s method=%s path=%s detail=%s",
            exc.kind.value,
            request.method,
            request.url.path,
            exc.log_detail or exc.message,
        )
    return error_response(exc.kind, exc.message)


async def _handle_database_error(request: Request, exc: asyncpg.PostgresError) -> JSONResponse:
    # Full detail stays in the server log; the client gets an opaque error.
    logger.exception(
        "database_error method=%s path=%s sqlstate=%s",
        request.method,
        request.url.path,
        getattr(exc, "sqlstate", None),
        exc_info=exc,
    )
    return error_response(ErrorKind.DATABASE_ERROR, extra={"retryable": False})


async def _handle_database_timeout(request: Request, exc: Exception) -> JSONResponse:
    # Reads are safe to retry; a write may already have been applied.
    if request.method in _READ_METHODS:
        logger.warning("database_timeout method=%s path=%s", request.method, request.url.path)
        return error_response(ErrorKind.DATABASE_TIMEOUT, extra={"retryable": True})

    logger.error("database_timeout method=%s path=%s", request.method, request.url.path)
    return error_response(ErrorKind.DATABASE_ERROR, extra={"retryable": False})


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Drop echoed input: it may be a password.
    errors = [
        {k: v for k, v in err.items() if k not in ("input", "ctx", "url")}
        for err in exc.errors()
    ]
    return error_response(ErrorKind.BAD_REQUEST, extra={"errors": jsonable_encoder(errors)})


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_error method=%s path=%s error=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc_info=exc,
    )
    return error_response(ErrorKind.INTERNAL_SERVER_ERROR)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _handle_api_error)
    app.add_exception_handler(asyncpg.PostgresError, _handle_database_error)
    app.add_exception_handler(asyncpg.QueryCanceledError, _handle_database_timeout)
    app.add_exception_handler(asyncio.TimeoutError, _handle_database_timeout)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
