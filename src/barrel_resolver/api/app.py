"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from barrel_resolver import __version__
from barrel_resolver.api.routes import barrels_router, health_router
from barrel_resolver.config import get_settings
from barrel_resolver.logging import configure_logging, get_logger

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    # Configure logging first
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        logger.info("application_starting", version=__version__)
        yield
        logger.info("application_stopped")

    app = FastAPI(
        title="Barrel Resolver API",
        description="Resolves barrel re-export chains and regenerates minimal export statements",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router)
    app.include_router(barrels_router, prefix="/api/v1")

    logger.info(
        "application_configured",
        debug=settings.debug,
        worker_count=settings.worker_count,
    )

    return app
