"""Tests for the FastAPI application factory module."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from geocode_cache.core.config import Settings
from geocode_cache.main import create_app
from geocode_cache.services.lookup_service import LookupService


@pytest.fixture
def memory_settings() -> Settings:
    return Settings(_env_file=None, cache_backend="memory", google_api_key=None, cors_origins="http://localhost:3000")


class TestCreateApp:
    """Tests for create_app."""

    def test_app_is_created(self, memory_settings) -> None:
        with patch("geocode_cache.main.get_settings", return_value=memory_settings):
            app = create_app()
        assert app.title == "Geocode Cache"

    def test_openapi_lists_geocode_route(self, memory_settings) -> None:
        with patch("geocode_cache.main.get_settings", return_value=memory_settings):
            app = create_app()
            with TestClient(app) as client:
                response = client.get("/openapi.json")
        assert response.status_code == 200
        assert "/api/v1/geocode" in response.json()["paths"]

    def test_lifespan_builds_service(self, memory_settings) -> None:
        with patch("geocode_cache.main.get_settings", return_value=memory_settings):
            app = create_app()
            with TestClient(app) as client:
                assert isinstance(app.state.lookup_service, LookupService)
                response = client.get("/api/v1/geocode")
                assert response.status_code == 400
            assert app.state.lookup_service is None

    def test_missing_api_key_surfaces_as_500(self, memory_settings) -> None:
        with patch("geocode_cache.main.get_settings", return_value=memory_settings):
            app = create_app()
            with TestClient(app) as client:
                response = client.get("/api/v1/geocode", params={"address": "123 Main Street"})
        assert response.status_code == 500
        assert "not configured" in response.text

    def test_cors_exposes_cache_header(self, memory_settings) -> None:
        with patch("geocode_cache.main.get_settings", return_value=memory_settings):
            app = create_app()
            with TestClient(app) as client:
                response = client.get("/api/v1/geocode", headers={"Origin": "http://localhost:3000"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert "X-Cache" in response.headers["access-control-expose-headers"]
