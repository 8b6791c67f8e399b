"""Authentication API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from src.api.dependencies import get_auth_service, require_identity
from src.api.rate_limit import get_login_rate_limit, limiter
from src.modules.auth.models import Identity
from src.modules.auth.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LoginUser,
    ProfileUpdate,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    UserResponse,
)
from src.modules.auth.service import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def register(
    data: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    """Create an account. Duplicate emails get 409."""
    user = await auth_service.register(data)
    return RegisterResponse(
        message="Registration successful",
        user=UserResponse(id=user.id, name=user.name, email=user.email),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login with email and password",
    description="Authenticate and receive a JWT token.",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
@limiter.limit(get_login_rate_limit)
async def login(
    request: Request,  # noqa: ARG001 - required by slowapi
    data: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """Authenticate user and return JWT token.

    Unknown email and wrong password produce the same 401 body.
    """
    result = await auth_service.login(data.email, data.password)
    return LoginResponse(
        message="Login successful",
        token=result.token.access_token,
        token_type=result.token.token_type,
        expires_in=result.token.expires_in,
        user=LoginUser(name=result.identity.name, email=result.identity.email),
    )


@router.get(
    "/session",
    response_model=SessionResponse,
    summary="Return the identity behind the bearer token",
    responses={401: {"model": ErrorResponse}},
)
async def session(
    identity: Annotated[Identity, Depends(require_identity)],
) -> SessionResponse:
    return SessionResponse(
        message="Session is valid",
        user=UserResponse(id=identity.id, name=identity.name, email=identity.email),
    )


@router.patch(
    "/profile",
    response_model=SessionResponse,
    summary="Change the caller's display name",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_profile(
    data: ProfileUpdate,
    identity: Annotated[Identity, Depends(require_identity)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> SessionResponse:
    """Rename the caller.

    Existing tokens keep the old name until the next login.
    """
    user = await auth_service.update_profile(identity, data.name)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account no longer exists",
        )

    return SessionResponse(
        message="Profile updated",
        user=UserResponse(id=user.id, name=user.name, email=user.email),
    )
