"""Exception handlers mapping failures to the JSON error contract.

Every error body is ``{"success": false, "message": ...}``. Messages come
from the exception classes, never from raw exception text.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.rate_limit import rate_limit_exceeded_handler
from src.infrastructure.database import StorageUnavailableError
from src.modules.auth.exceptions import (
    CredentialRejectedError,
    DuplicateEmailError,
    InputValidationError,
    InvalidTokenError,
)
from src.modules.auth.schemas import ErrorResponse

logger = structlog.get_logger()

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."
_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _error(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
        headers=headers,
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize a request validation failure without echoing input."""
    missing: list[str] = []
    invalid: list[str] = []

    for error in exc.errors():
        path = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
        field = path[-1] if path else "body"
        blank = error.get("type") == "string_too_short" and not error.get("input")
        if error.get("type") == "missing" or blank:
            missing.append(field)
        else:
            invalid.append(field)

    if missing:
        return f"Missing required fields: {', '.join(sorted(set(missing)))}"
    if invalid:
        return f"Invalid fields: {', '.join(sorted(set(invalid)))}"
    return "Invalid request"


async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


async def input_validation_handler(
    _request: Request, exc: InputValidationError
) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, exc.message)


async def credential_rejected_handler(
    _request: Request, exc: CredentialRejectedError
) -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, exc.message, _BEARER_CHALLENGE)


async def invalid_token_handler(
    _request: Request, exc: InvalidTokenError
) -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, exc.message, _BEARER_CHALLENGE)


async def duplicate_email_handler(
    _request: Request, exc: DuplicateEmailError
) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, exc.message)


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), exc.headers)


async def storage_unavailable_handler(
    request: Request, exc: StorageUnavailableError
) -> JSONResponse:
    logger.error("storage_unavailable", path=request.url.path, error=exc.message)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install all error handlers on an application."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(InputValidationError, input_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(CredentialRejectedError, credential_rejected_handler)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidTokenError, invalid_token_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DuplicateEmailError, duplicate_email_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageUnavailableError, storage_unavailable_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
