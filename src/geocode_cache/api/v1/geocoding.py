"""Geocoding API endpoint — cache-first single-address lookup."""

from fastapi import APIRouter, Depends, Query, Response

from geocode_cache.core.dependencies import get_lookup_service
from geocode_cache.services.lookup_service import LookupRequest, LookupService

geocoding_router = APIRouter(tags=["geocoding"])


@geocoding_router.get(
    "/geocode",
    responses={
        200: {"description": "Upstream JSON body, verbatim", "content": {"application/json": {}}},
        400: {"description": "Missing or blank address", "content": {"text/plain": {}}},
        500: {"description": "Upstream or internal failure", "content": {"text/plain": {}}},
    },
)
async def geocode_address(
    address: str | None = Query(  # noqa: B008
        None,
        description="Freeform address to geocode; used verbatim as the cache key",
    ),
    service: LookupService = Depends(get_lookup_service),  # noqa: B008
) -> Response:
    """Geocode an address, serving from cache when a fresh entry exists.

    The ``X-Cache`` header reports ``HIT`` or ``MISS`` on success.
    """
    result = await service.handle(LookupRequest(address=address))
    return Response(content=result.body, status_code=result.status_code, headers=result.headers)
