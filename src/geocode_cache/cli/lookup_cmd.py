"""One-shot lookup through the cache-first pipeline."""

import asyncio

import typer

from geocode_cache.services.lookup_service import LookupRequest, LookupResponse


def lookup(
    address: str = typer.Argument(..., help="Address to geocode"),
) -> None:
    """Look up an address and print the cache status and response body."""
    result = asyncio.run(_lookup(address))
    if not result.ok:
        typer.echo(f"Error ({result.status_code}): {result.body}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"X-Cache: {result.cache_status}", err=True)
    typer.echo(result.body)


async def _lookup(address: str) -> LookupResponse:
    """Async implementation of a single lookup."""
    from geocode_cache.core.config import get_settings
    from geocode_cache.core.database import dispose_engine, init_engine
    from geocode_cache.core.dependencies import build_lookup_service

    settings = get_settings()
    uses_database = settings.cache_backend == "database" and bool(settings.database_url)
    if uses_database:
        init_engine(settings.database_url)  # type: ignore[arg-type]

    try:
        service = build_lookup_service(settings)
        return await service.handle(LookupRequest(address=address))
    finally:
        if uses_database:
            await dispose_engine()
