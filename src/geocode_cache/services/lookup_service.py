"""Lookup service — cache-first address lookup in front of the upstream geocoder.

Pipeline per request: validate → store read → (hit) return, or (miss)
upstream fetch → store write → return. Store failures degrade to a miss or
a skipped write; upstream failures fail the request.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum

from loguru import logger

from geocode_cache.lib.geocoder.base import BaseGeocoder, UpstreamError
from geocode_cache.lib.store.base import BaseLookupStore, CacheEntry, StoreError

DEFAULT_TTL = timedelta(days=30)
MISSING_ADDRESS_MESSAGE = "Missing 'address' query parameter."


class CacheStatus(StrEnum):
    """Whether a response came from the store or from upstream."""

    HIT = "HIT"
    MISS = "MISS"


class BadRequestError(ValueError):
    """Raised when a lookup request is missing its address."""


@dataclass(frozen=True)
class LookupRequest:
    """An inbound lookup; ``address`` may be absent."""

    address: str | None = None

    @classmethod
    def from_query(cls, params: Mapping[str, str] | None) -> "LookupRequest":
        """Build a request from query-string parameters (which may be None)."""
        if not params:
            return cls()
        return cls(address=params.get("address"))


@dataclass(frozen=True)
class LookupResponse:
    """Outcome of a lookup, shaped for any HTTP-like host."""

    status_code: int
    body: str
    cache_status: CacheStatus | None = None

    @property
    def headers(self) -> dict[str, str]:
        if self.cache_status is None:
            return {"Content-Type": "text/plain; charset=utf-8"}
        return {"Content-Type": "application/json", "X-Cache": self.cache_status.value}

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def validate_request(request: LookupRequest) -> str:
    """Return the address to look up, unchanged.

    Whitespace is only trimmed for the emptiness check; the cache key and
    the upstream query use the address exactly as received.

    Raises:
        BadRequestError: If the address is missing or blank.
    """
    if request.address is None or not request.address.strip():
        raise BadRequestError(MISSING_ADDRESS_MESSAGE)
    return request.address


class LookupService:
    """Cache-first request handler.

    Args:
        store: Lookup store for cached responses.
        geocoder: Upstream provider consulted on a miss.
        ttl: Lifetime of newly written entries.
        clock: Returns the current time; used for expiry checks.
    """

    def __init__(
        self,
        store: BaseLookupStore,
        geocoder: BaseGeocoder,
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._geocoder = geocoder
        self._ttl = ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    async def handle(self, request: LookupRequest) -> LookupResponse:
        """Handle one lookup and always return a structured response.

        Args:
            request: The inbound request.

        Returns:
            200 with the cached or fresh body, 400 for a missing address,
            or 500 for upstream and unexpected failures.
        """
        try:
            address = validate_request(request)
            return await self.lookup(address)
        except BadRequestError as e:
            return LookupResponse(status_code=400, body=str(e))
        except UpstreamError as e:
            logger.warning(f"Upstream lookup failed: {e}")
            return LookupResponse(status_code=500, body=f"Upstream geocoding failed: {e.message}")
        except Exception as e:
            logger.exception("Error processing lookup request")
            return LookupResponse(status_code=500, body=f"Internal Server Error: {e}")

    async def lookup(self, address: str) -> LookupResponse:
        """Run the cache-first pipeline for a validated address.

        Raises:
            UpstreamError: If the address is not cached and upstream fails.
        """
        logger.info("Received request for address: {}", address)

        entry = await self._read_cache(address)
        if entry is not None:
            logger.bind(cache_status=CacheStatus.HIT.value).info("Returning cached response for address: {}", address)
            return LookupResponse(status_code=200, body=entry.payload, cache_status=CacheStatus.HIT)

        body = await self._fetch_fresh(address)
        logger.bind(cache_status=CacheStatus.MISS.value).info("Returning fresh response for address: {}", address)
        return LookupResponse(status_code=200, body=body, cache_status=CacheStatus.MISS)

    async def _read_cache(self, address: str) -> CacheEntry | None:
        """Return a usable cache entry, or None on miss, expiry, or store failure."""
        try:
            entry = await self._store.get(address)
        except StoreError as e:
            logger.warning(f"Cache read failed, treating as miss: {e}")
            return None

        if entry is None:
            logger.info("Cache miss for address: {}", address)
            return None

        # Native TTL deletion is eventual; never trust presence alone
        if entry.is_expired(self._clock()):
            logger.info("Cache expired for address: {}", address)
            return None

        return entry

    async def _fetch_fresh(self, address: str) -> str:
        """Fetch from upstream and write the body back before returning it."""
        body = await self._geocoder.fetch(address)
        await self._write_cache(address, body)
        return body

    async def _write_cache(self, address: str, body: str) -> None:
        try:
            entry = await self._store.put(address, body, self._ttl)
        except StoreError as e:
            logger.warning(f"Cache write failed, response not cached: {e}")
            return
        logger.info("Cached response for address: {} until {}", address, entry.expires_at.isoformat())
