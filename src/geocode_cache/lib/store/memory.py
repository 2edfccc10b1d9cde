"""In-memory lookup store (used for local dev/testing)."""

from datetime import timedelta

from geocode_cache.lib.store.base import BaseLookupStore, CacheEntry, expiry_from_now


class InMemoryLookupStore(BaseLookupStore):
    """Dictionary-backed store. Entries are never purged; expiry is left to callers."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    async def put(self, key: str, payload: str, ttl: timedelta) -> CacheEntry:
        entry = CacheEntry(key=key, payload=payload, expires_at=expiry_from_now(ttl))
        self._entries[key] = entry
        return entry

    def __len__(self) -> int:
        return len(self._entries)
