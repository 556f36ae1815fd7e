"""
HTTP mapping of application errors.

Every ErrorKind has a status code. Importing this module fails if a kind is
added without a mapping, so no domain error can fall through to a 500.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from pos_shared.config.logging import rest_api_logger as logger
from pos_shared.utils.exceptions import AppError, ErrorKind, UnavailableError

# NOT_FOUND on mutating routes keeps the existing 400 convention
READ_METHODS = frozenset({"GET", "HEAD"})

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_NAME: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ALREADY_ASSIGNED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_ASSIGNED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.TABLE_OCCUPIED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_unmapped = set(ErrorKind) - set(ERROR_STATUS)
if _unmapped:
    raise RuntimeError(f"ErrorKind without HTTP status: {sorted(k.value for k in _unmapped)}")


def status_for(kind: ErrorKind, method: str = "GET") -> int:
    if kind is ErrorKind.NOT_FOUND and method.upper() not in READ_METHODS:
        return status.HTTP_400_BAD_REQUEST
    return ERROR_STATUS[kind]


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(status_for(exc.kind, request.method), exc.detail, exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    for err in errors:
        loc = err.get("loc", ())
        if loc and loc[0] == "path" and err.get("type", "").startswith("uuid"):
            message = "Invalid UUID"
            break
    else:
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg')}" if field else "Invalid request"

    logger.info("Request validation failed", path=request.url.path, error=message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def store_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    error = UnavailableError(path=request.url.path, error=type(exc).__name__)
    return error_response(ERROR_STATUS[error.kind], error.detail)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(OperationalError, store_unavailable_handler)
    app.add_exception_handler(PoolTimeoutError, store_unavailable_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
