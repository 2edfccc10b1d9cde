"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from geocode_cache.api.middleware import setup_cors
from geocode_cache.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from geocode_cache.api.v1.geocoding import geocoding_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(geocoding_router)
    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app."""
    setup_cors(app, settings)
