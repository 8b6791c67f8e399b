"""Session token issuing and resolution (signed JWTs)."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
import structlog

from src.modules.auth.exceptions import ConfigurationError, InvalidTokenError
from src.modules.auth.models import Identity

logger = structlog.get_logger()

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRE_HOURS = 24
_REQUIRED_CLAIMS = ["sub", "email", "name", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _require_secret(secret: str | None) -> str:
    if not secret:
        raise ConfigurationError("JWT signing secret must not be empty")
    return secret


@dataclass(frozen=True)
class IssuedToken:
    """A freshly minted session token and its lifetime."""

    access_token: str
    issued_at: datetime
    expires_at: datetime
    token_type: str = "bearer"  # nosec B105 - OAuth2 token type, not a password

    @property
    def expires_in(self) -> int:
        """Seconds the token is valid for, from issuance."""
        return int((self.expires_at - self.issued_at).total_seconds())


class TokenIssuer:
    """Mints signed, time-bounded session tokens."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        expire_hours: int = DEFAULT_EXPIRE_HOURS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the issuer.

        Args:
            secret: Server-held signing secret.
            algorithm: JWT signing algorithm.
            expire_hours: Hours from issuance until expiry.
            clock: Source of the current UTC time.

        Raises:
            ConfigurationError: If the secret is empty.
        """
        self._secret = _require_secret(secret)
        self._algorithm = algorithm
        self._lifetime = timedelta(hours=expire_hours)
        self._clock = clock

    def issue(self, identity: Identity) -> IssuedToken:
        """Create a token for an authenticated identity.

        Args:
            identity: The validated identity.

        Returns:
            IssuedToken with the encoded JWT.
        """
        now = self._clock()
        expires = now + self._lifetime

        # JWT requires integer timestamps for exp and iat
        payload = {
            "sub": str(identity.id),
            "email": identity.email,
            "name": identity.name,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }

        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)

        logger.info("token_issued", user_id=str(identity.id), expires_at=expires.isoformat())
        return IssuedToken(access_token=token, issued_at=now, expires_at=expires)


class SessionResolver:
    """Maps a presented token back to the identity it was issued for.

    Resolution is stateless: the user store is not consulted, so claims
    reflect the account as it was when the token was issued.
    """

    def __init__(self, secret: str, *, algorithm: str = DEFAULT_ALGORITHM) -> None:
        """Initialize the resolver.

        Args:
            secret: The secret the issuer signs with.
            algorithm: Accepted JWT signing algorithm.

        Raises:
            ConfigurationError: If the secret is empty.
        """
        self._secret = _require_secret(secret)
        self._algorithm = algorithm

    def resolve(self, token: str) -> Identity:
        """Verify a token and return its identity claims.

        Args:
            token: JWT token string.

        Returns:
            The identity embedded at issuance.

        Raises:
            InvalidTokenError: If the token is malformed, forged, or expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
            return Identity(
                id=UUID(str(payload["sub"])),
                name=str(payload["name"]),
                email=str(payload["email"]),
            )

        except jwt.ExpiredSignatureError as e:
            logger.warning("token_expired")
            raise InvalidTokenError("Token has expired") from e

        except jwt.InvalidTokenError as e:
            logger.warning("token_invalid", error=str(e))
            raise InvalidTokenError("Invalid token") from e

        except ValueError as e:
            logger.warning("token_invalid_subject")
            raise InvalidTokenError("Invalid token") from e
