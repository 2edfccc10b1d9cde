"""FastAPI application factory.

Creates the FastAPI app with lifespan management and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from geocode_cache.core.config import get_settings
from geocode_cache.core.database import dispose_engine, init_engine
from geocode_cache.core.dependencies import build_lookup_service
from geocode_cache.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Build the lookup service on startup; release the engine on shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)

    uses_database = settings.cache_backend == "database" and bool(settings.database_url)
    if uses_database:
        init_engine(settings.database_url)  # type: ignore[arg-type]

    app.state.lookup_service = build_lookup_service(settings)

    yield

    app.state.lookup_service = None
    if uses_database:
        await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Geocode Cache",
        description="Cache-first proxy in front of the Google Maps Geocoding API",
        version="0.1.0",
        lifespan=lifespan,
    )

    from geocode_cache.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
