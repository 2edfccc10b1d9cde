"""CORS middleware registration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocode_cache.core.config import Settings


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware when origins are configured.

    Only ``GET`` is allowed and ``X-Cache`` is exposed so browser clients
    can read the cache status.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    origins = settings.cors_origin_list
    if not origins:
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Cache"],
    )
