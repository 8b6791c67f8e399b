"""Pydantic schemas for authentication API."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.modules.auth.password import MAX_PASSWORD_BYTES


class RegisterRequest(BaseModel):
    """Schema for creating a new user."""

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """Schema for login request.

    Email is not format-checked here: a malformed address is simply an
    unknown account.
    """

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    """Schema for changing the display name."""

    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value


class UserResponse(BaseModel):
    """Schema for user response (excludes sensitive data)."""

    id: UUID
    name: str
    email: str


class LoginUser(BaseModel):
    """User fields returned with a login token."""

    name: str
    email: str


class RegisterResponse(BaseModel):
    """Schema for a successful registration."""

    success: bool = True
    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    """Schema for login response with JWT token."""

    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until expiration
    user: LoginUser


class SessionResponse(BaseModel):
    """Schema for the identity behind a session token."""

    success: bool = True
    message: str
    user: UserResponse


class ErrorResponse(BaseModel):
    """Schema for every failed request."""

    success: bool = False
    message: str
