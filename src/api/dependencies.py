"""Request dependencies for the auth service and bearer-token identity."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.modules.auth.exceptions import InvalidTokenError
from src.modules.auth.models import Identity
from src.modules.auth.service import AuthService

_bearer = HTTPBearer(auto_error=False)

# Configured during app startup
_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get the auth service instance.

    Raises:
        HTTPException: 503 if startup has not configured the service.
    """
    if _auth_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service not configured",
        )
    return _auth_service


def set_auth_service(service: AuthService | None) -> None:
    """Set (or clear) the auth service instance."""
    global _auth_service
    _auth_service = service


def require_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> Identity:
    """Resolve the bearer token into the caller's identity.

    The identity is also stored on ``request.state.identity`` so anything
    later in the same request can read it.

    Raises:
        InvalidTokenError: If no token is presented or it does not resolve.
    """
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError("Authentication required")

    identity = auth_service.resolve_session(credentials.credentials)
    request.state.identity = identity
    return identity
