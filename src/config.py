"""Application configuration using pydantic-settings."""

from functools import lru_cache

import structlog
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.modules.auth.exceptions import ConfigurationError

logger = structlog.get_logger()

# Never valid outside local development; only used with ALLOW_INSECURE_DEV_SECRET.
INSECURE_DEV_JWT_SECRET = "insecure-development-secret-do-not-use-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Gatekeeper"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_path: str = "./data/gatekeeper.db"

    # Authentication
    jwt_secret_key: SecretStr | None = None  # Secret for JWT signing
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24  # Token expiration in hours
    allow_insecure_dev_secret: bool = False  # Fall back to a dev-only secret
    bcrypt_rounds: int = 12  # Work factor, 4..31

    # Rate limiting (login endpoint)
    rate_limit_requests: int = 10
    rate_limit_window: str = "minute"

    # Observability
    otel_enabled: bool = False
    otel_endpoint: str | None = None  # e.g. http://localhost:4318
    otel_console_export: bool = False
    otel_sample_rate: float = 1.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def resolve_jwt_secret(settings: Settings) -> str:
    """Return the signing secret, failing fast when none is configured.

    Args:
        settings: Application settings.

    Returns:
        The secret used by the token issuer and resolver.

    Raises:
        ConfigurationError: If no secret is set and the insecure development
            fallback is not explicitly enabled.
    """
    secret = (
        settings.jwt_secret_key.get_secret_value()
        if settings.jwt_secret_key is not None
        else ""
    )
    if secret:
        return secret

    if settings.allow_insecure_dev_secret:
        logger.warning(
            "insecure_dev_secret_in_use",
            hint="set JWT_SECRET_KEY before deploying",
        )
        return INSECURE_DEV_JWT_SECRET

    raise ConfigurationError("JWT_SECRET_KEY is not set")
