"""Service wiring and FastAPI dependency injection.

``build_lookup_service`` assembles the store and upstream provider from
settings. Hosts build it once and hand it to request handlers; the FastAPI
app keeps it on ``app.state``.
"""

from datetime import timedelta

from fastapi import HTTPException, Request, status

from geocode_cache.core.config import Settings
from geocode_cache.lib.geocoder import create_geocoder
from geocode_cache.lib.store import create_lookup_store
from geocode_cache.services.lookup_service import LookupService
from geocode_cache.services.single_flight_service import SingleFlightLookupService


def build_lookup_service(settings: Settings) -> LookupService:
    """Create the lookup service described by settings.

    Args:
        settings: Application settings.

    Returns:
        A LookupService, or its single-flight variant when enabled.
    """
    store = create_lookup_store(settings)
    geocoder = create_geocoder(settings)
    service_cls = SingleFlightLookupService if settings.single_flight_enabled else LookupService
    return service_cls(store, geocoder, ttl=timedelta(days=settings.cache_ttl_days))


def get_lookup_service(request: Request) -> LookupService:
    """Return the lookup service created during application startup.

    Raises:
        HTTPException: If the application was started without one.
    """
    service = getattr(request.app.state, "lookup_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Lookup service is not initialized",
        )
    return service
