"""Google Maps Geocoding API provider.

Uses the Google Maps Geocoding API
(https://developers.google.com/maps/documentation/geocoding/)
for address lookups. Requires an API key. The JSON body is returned
verbatim so it can be cached and replayed without reinterpretation.
"""

import httpx
from loguru import logger

from geocode_cache.lib.geocoder.base import BaseGeocoder, UpstreamError

GOOGLE_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_TIMEOUT = 10.0


class GoogleMapsGeocoder(BaseGeocoder):
    """Google Maps geocoder provider."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = GOOGLE_API_URL,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._base_url = base_url

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def requires_api_key(self) -> bool:
        return True

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def fetch(self, address: str) -> str:
        """Fetch the raw Google Maps geocode response for an address.

        The API key is checked here rather than at construction so that a
        missing credential only fails requests that actually reach upstream.

        Args:
            address: Address string exactly as received from the client.

        Returns:
            Raw JSON response body.

        Raises:
            UpstreamError: On missing API key, transport, or HTTP errors.
        """
        if not self.is_configured:
            logger.error("Google API key is missing")
            raise UpstreamError("google", "Google API key is not configured", retryable=False)

        # httpx URL-escapes query parameters
        params = {"address": address, "key": self._api_key}

        logger.info("Calling Google Geocode API for address: {}", address)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._base_url, params=params)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Google Maps geocoder timeout")
            raise UpstreamError("google", "Geocoding request timed out") from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(f"Google Maps geocoder HTTP error {status_code}")
            raise UpstreamError(
                "google",
                f"Provider returned HTTP {status_code}",
                status_code=status_code,
                retryable=status_code >= 500 or status_code == 429,
            ) from e
        except httpx.TransportError as e:
            logger.warning("Google Maps geocoder connection error")
            raise UpstreamError("google", "Connection to geocoding provider failed") from e

        return response.text
