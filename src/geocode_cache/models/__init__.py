"""ORM model registry — import all models so Alembic autogenerate discovers them."""

from geocode_cache.models.geocode_cache_entry import GeocodeCacheEntry

__all__ = [
    "GeocodeCacheEntry",
]
