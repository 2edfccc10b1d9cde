"""Geocoder library — upstream providers that return raw response bodies.

Public API:
    - BaseGeocoder: Abstract provider interface
    - UpstreamError: Provider failure (transport, status, configuration)
    - GoogleMapsGeocoder: Google Maps provider
    - RetryingGeocoder: Optional exponential-backoff wrapper
    - get_geocoder: Provider factory/registry
    - create_geocoder: Build the configured provider from settings
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from geocode_cache.lib.geocoder.base import BaseGeocoder, UpstreamError
from geocode_cache.lib.geocoder.google_maps import GoogleMapsGeocoder
from geocode_cache.lib.geocoder.retry import RetryingGeocoder

if TYPE_CHECKING:
    from geocode_cache.core.config import Settings

# Provider registry — all known providers
_PROVIDERS: dict[str, type[BaseGeocoder]] = {
    "google": GoogleMapsGeocoder,
}


def get_available_providers() -> list[str]:
    """Return the names of all registered geocoder providers."""
    return sorted(_PROVIDERS.keys())


def get_geocoder(provider: str = "google", **kwargs: Any) -> BaseGeocoder:
    """Get a geocoder instance by provider name.

    Args:
        provider: Provider name (e.g., "google").
        **kwargs: Additional arguments forwarded to the provider constructor.

    Returns:
        An instance of the requested geocoder provider.

    Raises:
        ValueError: If the provider is not registered.
    """
    cls = _PROVIDERS.get(provider)
    if cls is None:
        msg = f"Unknown geocoder provider: {provider!r}. Available: {list(_PROVIDERS.keys())}"
        raise ValueError(msg)
    return cls(**kwargs)


def create_geocoder(settings: Settings) -> BaseGeocoder:
    """Build the upstream provider described by settings.

    A missing API key is not an error here; it surfaces as an
    UpstreamError on the first fetch.

    Args:
        settings: Application settings.

    Returns:
        The configured provider, wrapped for retries when enabled.
    """
    geocoder = get_geocoder(
        "google",
        api_key=settings.google_api_key,
        timeout=settings.google_timeout,
    )
    if settings.upstream_max_attempts > 1:
        geocoder = RetryingGeocoder(
            geocoder,
            max_attempts=settings.upstream_max_attempts,
            base_delay=settings.upstream_retry_base_delay,
        )
    return geocoder


__all__ = [
    "BaseGeocoder",
    "GoogleMapsGeocoder",
    "RetryingGeocoder",
    "UpstreamError",
    "create_geocoder",
    "get_available_providers",
    "get_geocoder",
]
