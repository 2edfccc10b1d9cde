"""Relational lookup store backed by the ``geocode_cache`` table."""

from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from geocode_cache.lib.store.base import BaseLookupStore, CacheEntry, StoreError, expiry_from_now
from geocode_cache.models.geocode_cache_entry import GeocodeCacheEntry

# Driver-level connection failures (e.g. asyncpg refusing to connect) are not wrapped by SQLAlchemy
_STORAGE_ERRORS = (SQLAlchemyError, OSError, TimeoutError)


class SqlLookupStore(BaseLookupStore):
    """Lookup store using one short-lived session per operation."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @property
    def backend_name(self) -> str:
        return "database"

    async def get(self, key: str) -> CacheEntry | None:
        try:
            async with self._session_factory() as session:
                row = await session.get(GeocodeCacheEntry, key)
        except _STORAGE_ERRORS as e:
            raise StoreError(self.backend_name, f"Cache read failed: {e}") from e

        if row is None:
            return None

        return CacheEntry(key=row.address, payload=row.response, expires_at=_as_utc(row.expires_at))

    async def put(self, key: str, payload: str, ttl: timedelta) -> CacheEntry:
        expires_at = expiry_from_now(ttl)
        try:
            async with self._session_factory() as session:
                # merge() upserts on the primary key; last write wins
                await session.merge(
                    GeocodeCacheEntry(
                        address=key,
                        response=payload,
                        expires_at=expires_at,
                        cached_at=datetime.now(UTC),
                    )
                )
                await session.commit()
        except _STORAGE_ERRORS as e:
            raise StoreError(self.backend_name, f"Cache write failed: {e}") from e

        return CacheEntry(key=key, payload=payload, expires_at=expires_at)


def _as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on round-trip; stored values are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
