"""Authentication exceptions.

Each exception carries the message that is safe to show to API clients.
"""

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class AuthError(Exception):
    """Base exception for authentication operations."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InputValidationError(AuthError):
    """Raised when a request is missing fields or carries malformed ones."""

    pass


class CredentialRejectedError(AuthError):
    """Raised when submitted credentials do not authenticate.

    The message is identical for unknown accounts and wrong passwords.
    """

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


class DuplicateEmailError(AuthError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email is already registered")


class InvalidTokenError(AuthError):
    """Raised when a session token is malformed, forged, or expired."""

    pass


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing."""

    pass
