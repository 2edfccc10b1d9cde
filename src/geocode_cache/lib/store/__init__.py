"""Lookup store library — pluggable cache backends for upstream responses.

Public API:
    - BaseLookupStore: Abstract store interface
    - CacheEntry: Cached payload with absolute expiry
    - StoreError: Connectivity/storage failure
    - DynamoDbLookupStore: DynamoDB backend
    - SqlLookupStore: SQLAlchemy backend
    - InMemoryLookupStore: Process-local backend for dev/testing
    - create_lookup_store: Build the configured backend from settings
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocode_cache.lib.store.base import BaseLookupStore, CacheEntry, StoreError
from geocode_cache.lib.store.dynamodb import DynamoDbLookupStore, create_dynamodb_client
from geocode_cache.lib.store.memory import InMemoryLookupStore
from geocode_cache.lib.store.sql import SqlLookupStore

if TYPE_CHECKING:
    from geocode_cache.core.config import Settings


def create_lookup_store(settings: Settings) -> BaseLookupStore:
    """Build the lookup store selected by ``settings.cache_backend``.

    The database backend expects ``init_engine`` to have been called.

    Args:
        settings: Application settings.

    Returns:
        A store instance for the configured backend.

    Raises:
        ValueError: If the backend is unknown or missing required settings.
    """
    backend = settings.cache_backend
    if backend == "dynamodb":
        client = create_dynamodb_client(settings.aws_region, settings.dynamodb_endpoint_url)
        return DynamoDbLookupStore(client, table_name=settings.dynamodb_table_name)
    if backend == "database":
        from geocode_cache.core.database import get_session_factory

        if not settings.database_url:
            msg = "DATABASE_URL is required when CACHE_BACKEND=database"
            raise ValueError(msg)
        return SqlLookupStore(get_session_factory())
    if backend == "memory":
        return InMemoryLookupStore()

    msg = f"Unknown cache backend: {backend!r}"
    raise ValueError(msg)


__all__ = [
    "BaseLookupStore",
    "CacheEntry",
    "DynamoDbLookupStore",
    "InMemoryLookupStore",
    "SqlLookupStore",
    "StoreError",
    "create_dynamodb_client",
    "create_lookup_store",
]
