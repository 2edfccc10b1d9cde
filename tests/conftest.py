"""Shared test fixtures: settings, recording store, and scripted upstream geocoder."""

import asyncio
import json
from datetime import timedelta

import pytest

from geocode_cache.core.config import Settings
from geocode_cache.lib.geocoder.base import BaseGeocoder, UpstreamError
from geocode_cache.lib.store.base import CacheEntry, StoreError
from geocode_cache.lib.store.memory import InMemoryLookupStore

VANDERBILT_ADDRESS = "70 Vanderbilt Ave, New York, NY 10017"


def google_body(address: str) -> str:
    """A Google-shaped JSON body that differs per address."""
    return json.dumps(
        {
            "results": [
                {
                    "formatted_address": f"{address}, USA",
                    "geometry": {"location": {"lat": 40.7536, "lng": -73.9774}, "location_type": "ROOFTOP"},
                }
            ],
            "status": "OK",
        }
    )


class RecordingStore(InMemoryLookupStore):
    """In-memory store that counts calls and can be told to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.get_calls: list[str] = []
        self.put_calls: list[tuple[str, str, timedelta]] = []
        self.fail_get = False
        self.fail_put = False

    async def get(self, key: str) -> CacheEntry | None:
        self.get_calls.append(key)
        if self.fail_get:
            raise StoreError("memory", "simulated read outage")
        return await super().get(key)

    async def put(self, key: str, payload: str, ttl: timedelta) -> CacheEntry:
        self.put_calls.append((key, payload, ttl))
        if self.fail_put:
            raise StoreError("memory", "simulated write outage")
        return await super().put(key, payload, ttl)

    def seed(self, entry: CacheEntry) -> None:
        self._entries[entry.key] = entry


class ScriptedGeocoder(BaseGeocoder):
    """Upstream stand-in returning per-address bodies or a configured error."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.error: UpstreamError | None = None
        self.gate: asyncio.Event | None = None

    @property
    def provider_name(self) -> str:
        return "scripted"

    async def fetch(self, address: str) -> str:
        self.calls.append(address)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return google_body(address)


@pytest.fixture
def settings() -> Settings:
    """Test application settings (no .env, in-memory cache)."""
    return Settings(_env_file=None, cache_backend="memory", google_api_key="test-key")


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def geocoder() -> ScriptedGeocoder:
    return ScriptedGeocoder()


@pytest.fixture
def address() -> str:
    return VANDERBILT_ADDRESS


@pytest.fixture
def body_for():
    """Return the body the scripted geocoder produces for an address."""
    return google_body
