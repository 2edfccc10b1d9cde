"""Abstract upstream geocoder interface for pluggable provider support."""

from abc import ABC, abstractmethod


class UpstreamError(Exception):
    """Raised when the upstream geocoding provider cannot produce a response.

    Covers transport failures (timeout, connection error), non-success HTTP
    statuses, and missing provider configuration such as an absent API key.

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
        retryable: Whether repeating the call could succeed.
    """

    def __init__(
        self,
        provider_name: str,
        message: str,
        status_code: int | None = None,
        *,
        retryable: bool = True,
    ) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(f"{provider_name}: {message}")


class BaseGeocoder(ABC):
    """Abstract upstream provider. All providers must implement this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this geocoder provider."""

    @property
    def requires_api_key(self) -> bool:
        """Whether this provider requires an API key to function."""
        return False

    @property
    def is_configured(self) -> bool:
        """Whether this provider has all required configuration (e.g., API keys)."""
        return True

    @abstractmethod
    async def fetch(self, address: str) -> str:
        """Fetch the provider's raw response body for an address.

        Args:
            address: Address string exactly as received from the client.

        Returns:
            The response body, unmodified.

        Raises:
            UpstreamError: On transport failure, non-success status, or
                missing configuration.
        """
