"""Unit tests for the lookup CLI command."""

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from geocode_cache.cli.app import app
from geocode_cache.services.lookup_service import CacheStatus, LookupResponse

runner = CliRunner()


@pytest.fixture(autouse=True)
def _memory_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_BACKEND", "memory")


class TestLookupCommand:
    """Tests for `geocode-cache lookup`."""

    def test_prints_body_on_success(self) -> None:
        result_obj = LookupResponse(status_code=200, body='{"status": "OK"}', cache_status=CacheStatus.MISS)
        with patch("geocode_cache.cli.lookup_cmd._lookup", new_callable=AsyncMock, return_value=result_obj):
            result = runner.invoke(app, ["lookup", "70 Vanderbilt Ave, New York, NY 10017"])

        assert result.exit_code == 0
        assert '{"status": "OK"}' in result.output

    def test_nonzero_exit_on_failure(self) -> None:
        result_obj = LookupResponse(status_code=500, body="Upstream geocoding failed: boom")
        with patch("geocode_cache.cli.lookup_cmd._lookup", new_callable=AsyncMock, return_value=result_obj):
            result = runner.invoke(app, ["lookup", "123 Main Street"])

        assert result.exit_code == 1

    def test_missing_api_key_fails_lazily(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

        result = runner.invoke(app, ["lookup", "123 Main Street"])

        assert result.exit_code == 1


class TestDbCommand:
    def test_requires_database_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        result = runner.invoke(app, ["db", "current"])
        assert result.exit_code == 1
