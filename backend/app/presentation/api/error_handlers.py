"""Maps domain and framework exceptions onto the failure envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BotDetectedError,
    DomainError,
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
    InvalidInputError,
    RateLimitedError,
)
from app.presentation.api.responses import failure_body

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred"

# (status, short message) per domain error, most specific first
_DOMAIN_STATUS: list[tuple[type[DomainError], int, str]] = [
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND, "Not Found"),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST, "Bad Request"),
    (DuplicateEntityError, status.HTTP_409_CONFLICT, "Conflict"),
    (EntityInUseError, status.HTTP_409_CONFLICT, "Conflict"),
    (RateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS, "Too Many Requests"),
    (BotDetectedError, status.HTTP_403_FORBIDDEN, "Forbidden"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    (AuthorizationError, status.HTTP_403_FORBIDDEN, "Forbidden"),
]


def status_for(exc: DomainError) -> tuple[int, str]:
    for exc_type, code, message in _DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            return code, message
    return status.HTTP_400_BAD_REQUEST, "Bad Request"


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code, message = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=code,
        content=failure_body(request, code, message, str(exc)),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return JSONResponse(
        status_code=code,
        content=failure_body(request, code, "Validation Error", "; ".join(details)),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=failure_body(request, exc.status_code, "HTTP Error", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=code,
        content=failure_body(request, code, "Internal Server Error", INTERNAL_ERROR_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
