"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from src.api.dependencies import set_auth_service
from src.api.errors import register_exception_handlers
from src.api.health import router as health_router
from src.api.rate_limit import limiter
from src.config import get_settings, resolve_jwt_secret
from src.infrastructure.database import init_database
from src.infrastructure.observability import (
    configure_logging,
    init_observability,
    shutdown_observability,
)
from src.modules.auth.repository import UserRepository
from src.modules.auth.routes import router as auth_router
from src.modules.auth.service import AuthService

logger = structlog.get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan handler for startup/shutdown.

    Configuration errors propagate out of startup so the server never
    begins serving without a signing secret.
    """
    current = get_settings()
    configure_logging(debug=current.debug)
    init_observability(
        current.app_name,
        current.app_version,
        otlp_endpoint=current.otel_endpoint,
        console_export=current.otel_console_export,
        enabled=current.otel_enabled,
        sample_rate=current.otel_sample_rate,
        app=app,
    )

    jwt_secret = resolve_jwt_secret(current)

    database = await init_database(current.database_path)
    auth_service = AuthService.create(
        UserRepository(database),
        jwt_secret=jwt_secret,
        jwt_algorithm=current.jwt_algorithm,
        jwt_expire_hours=current.jwt_expire_hours,
        bcrypt_rounds=current.bcrypt_rounds,
    )
    set_auth_service(auth_service)
    logger.info("auth_service_initialized", expire_hours=current.jwt_expire_hours)

    try:
        yield
    finally:
        set_auth_service(None)
        await database.disconnect()
        shutdown_observability()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.state.limiter = limiter
register_exception_handlers(app)

app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(auth_router)
