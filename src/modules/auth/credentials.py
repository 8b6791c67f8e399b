"""Credential sources and the validator that dispatches to them."""

from dataclasses import dataclass, field
from typing import Protocol

import structlog

from src.modules.auth.exceptions import CredentialRejectedError
from src.modules.auth.models import Identity
from src.modules.auth.password import PasswordHasher
from src.modules.auth.repository import UserRepository

logger = structlog.get_logger()

PASSWORD_KIND = "password"


@dataclass(frozen=True)
class PasswordCredentials:
    """Email and plaintext password submitted at login."""

    email: str
    password: str = field(repr=False)
    kind: str = PASSWORD_KIND


class Credentials(Protocol):
    """Anything a CredentialSource can check."""

    kind: str


class CredentialSource(Protocol):
    """Protocol for a way of proving identity.

    Implementations return the Identity on success and None on any failure.
    They must not reveal why a check failed.
    """

    kind: str

    async def authenticate(self, credentials: Credentials) -> Identity | None:
        """Check the credentials.

        Args:
            credentials: Credentials whose kind matches this source.

        Returns:
            Identity if the credentials are valid, None otherwise.
        """
        ...


class PasswordCredentialSource:
    """Email/password credentials checked against stored bcrypt hashes."""

    kind = PASSWORD_KIND

    def __init__(self, repository: UserRepository, hasher: PasswordHasher) -> None:
        self._repo = repository
        self._hasher = hasher
        self._dummy_hash: str | None = None

    async def authenticate(self, credentials: Credentials) -> Identity | None:
        if not isinstance(credentials, PasswordCredentials):
            return None

        stored = await self._repo.get_credentials(credentials.email)

        if stored is None:
            # Same bcrypt cost as a real check, so timing does not reveal the account
            await self._hasher.verify_async(credentials.password, await self._get_dummy_hash())
            logger.warning("auth_failed_user_not_found")
            return None

        if stored.hashed_password is None:
            logger.warning("auth_failed_no_password", user_id=str(stored.user.id))
            return None

        if not await self._hasher.verify_async(credentials.password, stored.hashed_password):
            logger.warning("auth_failed_invalid_password", user_id=str(stored.user.id))
            return None

        return stored.user.to_identity()

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await self._hasher.hash_async("dummy-password-for-timing")
        return self._dummy_hash


class CredentialValidator:
    """Decides whether a login attempt is valid.

    Every failure, whatever its cause, raises the same CredentialRejectedError.
    """

    def __init__(self, sources: list[CredentialSource]) -> None:
        self._sources = {source.kind: source for source in sources}

    async def validate(self, email: str, password: str) -> Identity:
        """Validate an email/password pair.

        Raises:
            CredentialRejectedError: If the credentials do not authenticate.
        """
        return await self.validate_credentials(PasswordCredentials(email=email, password=password))

    async def validate_credentials(self, credentials: Credentials) -> Identity:
        """Validate credentials of any registered kind.

        Raises:
            CredentialRejectedError: If no source accepts the credentials.
        """
        source = self._sources.get(credentials.kind)
        if source is None:
            logger.warning("auth_failed_unsupported_credentials", kind=credentials.kind)
            raise CredentialRejectedError()

        identity = await source.authenticate(credentials)
        if identity is None:
            raise CredentialRejectedError()

        logger.info("user_authenticated", user_id=str(identity.id))
        return identity
