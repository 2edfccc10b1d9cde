"""Single-flight variant of the lookup service.

Concurrent misses for the same address share one upstream fetch and one
store write. Off by default; enabled with ``SINGLE_FLIGHT_ENABLED``.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta

from loguru import logger

from geocode_cache.lib.geocoder.base import BaseGeocoder
from geocode_cache.lib.store.base import BaseLookupStore
from geocode_cache.services.lookup_service import DEFAULT_TTL, LookupService


class SingleFlightLookupService(LookupService):
    """LookupService that coalesces identical in-flight misses within one process."""

    def __init__(
        self,
        store: BaseLookupStore,
        geocoder: BaseGeocoder,
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(store, geocoder, ttl=ttl, clock=clock)
        self._in_flight: dict[str, asyncio.Task[str]] = {}

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    async def _fetch_fresh(self, address: str) -> str:
        task = self._in_flight.get(address)
        if task is None:
            task = asyncio.ensure_future(super()._fetch_fresh(address))
            self._in_flight[address] = task
            task.add_done_callback(lambda t: self._release(address, t))
        else:
            logger.debug("Joining in-flight fetch for address: {}", address)

        # A cancelled waiter must not cancel the fetch other callers share
        return await asyncio.shield(task)

    def _release(self, address: str, task: "asyncio.Task[str]") -> None:
        if self._in_flight.get(address) is task:
            del self._in_flight[address]
