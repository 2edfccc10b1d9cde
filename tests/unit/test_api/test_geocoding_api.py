"""Unit tests for the geocode API endpoint."""

import json
from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from geocode_cache.api.v1.geocoding import geocoding_router
from geocode_cache.lib.geocoder.base import UpstreamError
from geocode_cache.services.lookup_service import LookupService


@pytest.fixture
def app(store, geocoder) -> FastAPI:
    app = FastAPI()
    app.include_router(geocoding_router, prefix="/api/v1")
    app.state.lookup_service = LookupService(store, geocoder)
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestGeocodeEndpoint:
    """Tests for GET /api/v1/geocode."""

    async def test_missing_address_returns_400(self, client, store, geocoder) -> None:
        response = await client.get("/api/v1/geocode")

        assert response.status_code == 400
        assert "Missing 'address' query parameter" in response.text
        assert "x-cache" not in response.headers
        assert store.get_calls == []
        assert geocoder.calls == []

    async def test_empty_address_returns_400(self, client) -> None:
        response = await client.get("/api/v1/geocode", params={"address": ""})
        assert response.status_code == 400

    async def test_miss_then_hit(self, client, address, body_for) -> None:
        first = await client.get("/api/v1/geocode", params={"address": address})
        second = await client.get("/api/v1/geocode", params={"address": address})

        assert first.status_code == 200
        assert first.headers["content-type"] == "application/json"
        assert first.headers["x-cache"] == "MISS"
        assert first.text == body_for(address)
        assert second.headers["x-cache"] == "HIT"
        assert second.text == first.text

    async def test_body_is_valid_json(self, client) -> None:
        response = await client.get("/api/v1/geocode", params={"address": "123 Main Street"})
        body = json.loads(response.text)
        assert "results" in body or "status" in body

    async def test_special_characters(self, client, geocoder) -> None:
        address = "Rue de l'École Polytechnique, Paris, France"
        response = await client.get("/api/v1/geocode", params={"address": address})

        assert response.status_code == 200
        assert geocoder.calls == [address]

    async def test_upstream_failure_returns_500(self, client, store, geocoder) -> None:
        geocoder.error = UpstreamError("scripted", "Provider returned HTTP 502", status_code=502)

        response = await client.get("/api/v1/geocode", params={"address": "123 Main Street"})

        assert response.status_code == 500
        assert "HTTP 502" in response.text
        assert "x-cache" not in response.headers
        assert store.put_calls == []

    async def test_store_outage_still_serves(self, client, store) -> None:
        store.fail_get = True
        store.fail_put = True

        response = await client.get("/api/v1/geocode", params={"address": "123 Main Street"})

        assert response.status_code == 200
        assert response.headers["x-cache"] == "MISS"

    async def test_independent_addresses(self, client) -> None:
        r1 = await client.get("/api/v1/geocode", params={"address": "1600 Pennsylvania Avenue NW Washington DC 20500"})
        r2 = await client.get("/api/v1/geocode", params={"address": "Times Square New York NY 10036"})

        assert r1.status_code == 200
        assert r2.status_code == 200
        assert r1.text != r2.text


class TestServiceNotInitialized:
    async def test_returns_503(self) -> None:
        app = FastAPI()
        app.include_router(geocoding_router)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/geocode", params={"address": "1 Main St"})
        assert response.status_code == 503
