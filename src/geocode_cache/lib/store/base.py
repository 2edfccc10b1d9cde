"""Abstract lookup store interface for pluggable cache backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True)
class CacheEntry:
    """A cached upstream response.

    Attributes:
        key: The address exactly as received from the client.
        payload: Opaque response body, stored and returned verbatim.
        expires_at: Absolute expiry (timezone-aware, UTC).
    """

    key: str
    payload: str
    expires_at: datetime

    def __post_init__(self) -> None:
        if self.expires_at.tzinfo is None:
            msg = "expires_at must be timezone-aware"
            raise ValueError(msg)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Whether the entry is stale at ``now`` (defaults to the current time)."""
        now = now or datetime.now(UTC)
        return now > self.expires_at


class StoreError(Exception):
    """Raised when the backing store cannot be read or written.

    Not-found is never an error; ``get`` returns None instead.

    Args:
        backend: Name of the failing store backend.
        message: Human-readable error description.
    """

    def __init__(self, backend: str, message: str) -> None:
        self.backend = backend
        self.message = message
        super().__init__(f"{backend}: {message}")


class BaseLookupStore(ABC):
    """Abstract key-value store for cached upstream responses."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Unique name identifying this store backend."""

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Look up a cached entry.

        Expired entries that the backend has not purged yet may be
        returned; callers must check ``CacheEntry.is_expired``.

        Args:
            key: Address string (cache key).

        Returns:
            The entry, or None if absent.

        Raises:
            StoreError: On connectivity or storage failures.
        """

    @abstractmethod
    async def put(self, key: str, payload: str, ttl: timedelta) -> CacheEntry:
        """Store a payload that expires ``ttl`` from now.

        Args:
            key: Address string (cache key).
            payload: Response body to cache.
            ttl: Time-to-live for the entry.

        Returns:
            The entry that was written.

        Raises:
            StoreError: On connectivity or storage failures.
        """


def expiry_from_now(ttl: timedelta) -> datetime:
    """Return the absolute UTC expiry for an entry written now."""
    return datetime.now(UTC) + ttl
