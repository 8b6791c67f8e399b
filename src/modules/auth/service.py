"""Authentication service: registration, login, and session checks."""

from dataclasses import dataclass

import structlog

from src.infrastructure.observability import traced
from src.modules.auth.credentials import CredentialValidator, PasswordCredentialSource
from src.modules.auth.exceptions import DuplicateEmailError, InputValidationError
from src.modules.auth.models import Identity, User
from src.modules.auth.password import PasswordHasher
from src.modules.auth.repository import UserRepository
from src.modules.auth.schemas import RegisterRequest
from src.modules.auth.tokens import IssuedToken, SessionResolver, TokenIssuer

logger = structlog.get_logger()


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login."""

    token: IssuedToken
    identity: Identity


class AuthService:
    """Service for authentication operations.

    Wires the user repository, password hasher, credential validator,
    token issuer, and session resolver into the request-facing flows.
    """

    def __init__(
        self,
        repository: UserRepository,
        *,
        hasher: PasswordHasher,
        validator: CredentialValidator,
        issuer: TokenIssuer,
        resolver: SessionResolver,
    ) -> None:
        """Initialize the auth service.

        Args:
            repository: User repository for database operations.
            hasher: Password hasher used at registration.
            validator: Credential validator used at login.
            issuer: Token issuer for successful logins.
            resolver: Resolver for presented session tokens.
        """
        self._repo = repository
        self._hasher = hasher
        self._validator = validator
        self._issuer = issuer
        self._resolver = resolver

    @classmethod
    def create(
        cls,
        repository: UserRepository,
        *,
        jwt_secret: str,
        jwt_algorithm: str = "HS256",
        jwt_expire_hours: int = 24,
        bcrypt_rounds: int = 12,
    ) -> "AuthService":
        """Build the service with password credentials and JWT sessions.

        Args:
            repository: User repository for database operations.
            jwt_secret: Secret key for JWT signing.
            jwt_algorithm: Algorithm for JWT signing.
            jwt_expire_hours: Hours until token expiration.
            bcrypt_rounds: Password hashing work factor.

        Raises:
            ConfigurationError: If jwt_secret is empty.
        """
        hasher = PasswordHasher(rounds=bcrypt_rounds)
        return cls(
            repository,
            hasher=hasher,
            validator=CredentialValidator([PasswordCredentialSource(repository, hasher)]),
            issuer=TokenIssuer(
                jwt_secret,
                algorithm=jwt_algorithm,
                expire_hours=jwt_expire_hours,
            ),
            resolver=SessionResolver(jwt_secret, algorithm=jwt_algorithm),
        )

    @traced(span_name="auth.register")
    async def register(self, data: RegisterRequest) -> User:
        """Register a new user.

        A known email is rejected before any hashing work. The insert is
        still guarded by the store's unique constraint for racing requests.

        Args:
            data: Validated registration data.

        Returns:
            The created User.

        Raises:
            DuplicateEmailError: If the email already exists.
            InputValidationError: If the password cannot be hashed.
        """
        if await self._repo.get_by_email(data.email) is not None:
            logger.info("registration_conflict", stage="checking_uniqueness")
            raise DuplicateEmailError(data.email)

        try:
            hashed = await self._hasher.hash_async(data.password)
        except ValueError as e:
            raise InputValidationError(str(e)) from e

        try:
            user = await self._repo.create(
                name=data.name,
                email=data.email,
                hashed_password=hashed,
            )
        except DuplicateEmailError:
            logger.info("registration_conflict", stage="storing")
            raise

        logger.info("user_registered", user_id=str(user.id))
        return user

    @traced(span_name="auth.login")
    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate user and create token.

        Args:
            email: User's email address.
            password: Plain text password.

        Returns:
            LoginResult with token and identity.

        Raises:
            InputValidationError: If email or password is missing.
            CredentialRejectedError: If authentication fails.
        """
        missing = [field for field, value in (("email", email), ("password", password)) if not value]
        if missing:
            raise InputValidationError(f"Missing required fields: {', '.join(missing)}")

        identity = await self._validator.validate(email, password)
        token = self._issuer.issue(identity)
        return LoginResult(token=token, identity=identity)

    def resolve_session(self, token: str) -> Identity:
        """Verify a bearer token and return its identity.

        Raises:
            InvalidTokenError: If token is invalid or expired.
        """
        return self._resolver.resolve(token)

    @traced(span_name="auth.update_profile")
    async def update_profile(self, identity: Identity, name: str) -> User | None:
        """Change the caller's display name.

        Returns:
            The updated User, or None if the account no longer exists.
        """
        return await self._repo.update_name(identity.id, name)
