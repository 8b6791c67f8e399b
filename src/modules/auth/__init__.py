"""Authentication module: credentials, users, and session tokens."""

from src.modules.auth.credentials import (
    CredentialSource,
    CredentialValidator,
    PasswordCredentials,
    PasswordCredentialSource,
)
from src.modules.auth.exceptions import (
    AuthError,
    ConfigurationError,
    CredentialRejectedError,
    DuplicateEmailError,
    InputValidationError,
    InvalidTokenError,
)
from src.modules.auth.models import Identity, User, UserCredentials
from src.modules.auth.password import PasswordHasher
from src.modules.auth.repository import UserRepository
from src.modules.auth.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from src.modules.auth.service import AuthService, LoginResult
from src.modules.auth.tokens import IssuedToken, SessionResolver, TokenIssuer

__all__ = [
    "AuthError",
    "AuthService",
    "ConfigurationError",
    "CredentialRejectedError",
    "CredentialSource",
    "CredentialValidator",
    "DuplicateEmailError",
    "Identity",
    "InputValidationError",
    "InvalidTokenError",
    "IssuedToken",
    "LoginRequest",
    "LoginResponse",
    "LoginResult",
    "PasswordCredentialSource",
    "PasswordCredentials",
    "PasswordHasher",
    "RegisterRequest",
    "RegisterResponse",
    "SessionResolver",
    "TokenIssuer",
    "User",
    "UserCredentials",
    "UserRepository",
    "UserResponse",
]
