"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fieldops.config import Settings, get_settings
from fieldops.infrastructure.database import close_db, init_db
from fieldops.infrastructure.middleware import (
    RequestContextMiddleware,
    error_handler_middleware,
)
from fieldops.infrastructure.telemetry import configure_logging, get_logger
from fieldops.infrastructure.telemetry.metrics import set_service_info
from fieldops.presentation.http import api_router, metrics_router

logger = get_logger(__name__)


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        logger.info(
            "Starting field operations API",
            extra={
                "version": settings.version,
                "environment": settings.environment,
            },
        )
        settings.log_config_summary()

        await init_db(settings)
        logger.info("Database connection initialized")

        yield

        logger.info("Shutting down field operations API")
        await close_db()
        logger.info("Database connection closed")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override for testing

    Returns:
        Configured FastAPI application

    Raises:
        ConfigurationError: A required environment variable is missing
    """
    if settings is None:
        settings = get_settings()

    configure_logging(
        level=settings.log_level,
        format_type=settings.log_format,
        service_name=settings.service_name,
    )

    settings.ensure_required()

    set_service_info(
        version=settings.version,
        environment=settings.environment,
    )

    app = FastAPI(
        title="Field Operations API",
        description="ATM field visit reporting for agents and managers",
        version=settings.version,
        lifespan=_build_lifespan(settings),
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    # Add middleware (order matters - last added is first executed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    # Register error handlers
    error_handler_middleware(app)

    # Include API routes
    app.include_router(api_router)
    app.include_router(metrics_router, tags=["Metrics"])

    return app


def run() -> None:
    """Run the API with uvicorn using the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "fieldops.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
