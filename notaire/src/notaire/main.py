"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from notaire import __version__
from notaire.config.settings import Settings, get_settings
from notaire.di import get_container, initialize_container, shutdown_container
from notaire.domain.exceptions import NotaireException
from notaire.infrastructure.monitoring.logger import get_logger, setup_logging
from notaire.presentation.api.middleware import notaire_exception_handler
from notaire.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from notaire.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)
from notaire.presentation.api.routes import assets, auth, users


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    # JSON logs in production or when asked for explicitly
    json_logs = settings.LOG_JSON or settings.ENV == "production"
    setup_logging(level=settings.LOG_LEVEL, json_logs=json_logs)
    logger = get_logger(__name__)

    logger.info(f"Creating Notaire application (ENV={settings.ENV})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Notaire application...")
        await initialize_container()
        logger.info("Notaire application started successfully")

        yield

        logger.info("Shutting down Notaire application...")
        await shutdown_container()
        logger.info("Notaire application shutdown complete")

    app = FastAPI(
        title="Notaire API",
        description="Asset issuance and ownership ledger with optional anchoring",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware chain (last added runs first)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        GZipMiddleware,
        minimum_size=1000,
        compresslevel=6,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(NotaireException, notaire_exception_handler)

    # Register routes
    app.include_router(auth.router, prefix="/api")
    app.include_router(users.router, prefix="/api")
    app.include_router(assets.router, prefix="/api")

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint."""
        return {
            "service": "Notaire",
            "status": "running",
            "version": __version__,
            "description": "Asset issuance and ownership ledger",
        }

    @app.get("/health", tags=["Health"])
    async def health_check(response: Response):
        """
        Health check endpoint.

        Only the database is required; optional backends are reported
        as configured or disabled and never degrade the status.
        """
        container = get_container()
        db_healthy = await container.database.health_check()

        if not db_healthy:
            response.status_code = 503

        return {
            "status": "healthy" if db_healthy else "unhealthy",
            "version": __version__,
            "components": {
                "database": {"status": "healthy" if db_healthy else "unhealthy"},
                "ipfs": {
                    "status": "configured" if container.content_storage else "disabled"
                },
                "chain": {
                    "status": "configured" if container.chain_client else "disabled"
                },
                "sms": {
                    "status": "configured" if settings.twilio_enabled else "disabled"
                },
            },
        }

    @app.get("/metrics", tags=["Monitoring"])
    async def metrics():
        """
        Prometheus metrics endpoint.

        Returns metrics in Prometheus text format for scraping.
        """
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST,
        )

    logger.info("Notaire application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Get or create application instance (lazy initialization).

    For uvicorn: uvicorn notaire.main:get_app --factory
    """
    return create_app()


# For: uvicorn notaire.main:app
app: Optional[FastAPI] = None


def __getattr__(name: str):
    """Module-level __getattr__ for lazy app initialization."""
    global app
    if name == "app":
        if app is None:
            app = create_app()
        return app
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "notaire.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    main()
