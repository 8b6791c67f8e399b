"""Rate limiting configuration using slowapi."""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.config import get_settings
from src.modules.auth.schemas import ErrorResponse


def _get_rate_limit_key(request: Request) -> str:
    """Get the rate limit key from the request (client address)."""
    addr: str = get_remote_address(request)
    return addr


limiter = Limiter(key_func=_get_rate_limit_key)


def get_login_rate_limit() -> str:
    """Get the login rate limit string from settings."""
    settings = get_settings()
    return f"{settings.rate_limit_requests}/{settings.rate_limit_window}"


async def rate_limit_exceeded_handler(
    _request: Request,
    _exc: RateLimitExceeded,
) -> JSONResponse:
    """Return the standard error body with 429."""
    return JSONResponse(
        status_code=429,
        content=ErrorResponse(
            message="Too many attempts. Please wait a moment and try again."
        ).model_dump(),
    )
