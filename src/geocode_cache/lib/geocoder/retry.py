"""Retrying wrapper around an upstream geocoder.

Not used by default: a single attempt per request is the core contract.
Enabled when ``upstream_max_attempts`` is greater than one.
"""

import asyncio

from loguru import logger

from geocode_cache.lib.geocoder.base import BaseGeocoder, UpstreamError

DEFAULT_BASE_DELAY = 0.5  # seconds


class RetryingGeocoder(BaseGeocoder):
    """Retry transient upstream failures with exponential backoff.

    Args:
        inner: The geocoder to delegate to.
        max_attempts: Total attempts including the first call.
        base_delay: Delay before the first retry; doubled on each retry.
    """

    def __init__(self, inner: BaseGeocoder, max_attempts: int = 3, base_delay: float = DEFAULT_BASE_DELAY) -> None:
        if max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {max_attempts}"
            raise ValueError(msg)
        self._inner = inner
        self._max_attempts = max_attempts
        self._base_delay = base_delay

    @property
    def provider_name(self) -> str:
        return self._inner.provider_name

    @property
    def requires_api_key(self) -> bool:
        return self._inner.requires_api_key

    @property
    def is_configured(self) -> bool:
        return self._inner.is_configured

    async def fetch(self, address: str) -> str:
        """Fetch with retry; re-raises the last error once attempts run out."""
        for attempt in range(self._max_attempts - 1):
            try:
                return await self._inner.fetch(address)
            except UpstreamError as e:
                if not e.retryable:
                    raise
                delay = self._base_delay * (2**attempt)
                logger.warning(f"Upstream error (attempt {attempt + 1}/{self._max_attempts}), retrying in {delay}s: {e}")
                await asyncio.sleep(delay)

        return await self._inner.fetch(address)
