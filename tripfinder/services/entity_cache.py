"""Time-bounded cache of scored flight and hotel batches.

Flights are keyed by route ("JFK->LAX"), hotels by city name. A missing or
expired key triggers a full refresh: fetch raw records, benchmark that exact
batch, load the weight document and score every record. Concurrent callers
of the same key share one in-flight refresh.
"""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Generic, TypeVar

from tripfinder.exceptions.custom import InventoryProviderError, NoInventoryError
from tripfinder.mappers.benchmarks import compute_flight_benchmark, compute_hotel_benchmark
from tripfinder.mappers.scoring import attach_flight_scores, attach_hotel_scores
from tripfinder.schemas.inventory import FlightRecord, HotelRecord
from tripfinder.services.inventory import InventoryProvider
from tripfinder.services.weights import WeightProfileStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

FLIGHT_TTL = timedelta(hours=24)
HOTEL_TTL = timedelta(days=30)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    fetched_at: datetime
    payload: tuple[T, ...]


class _Bucket(Generic[T]):
    """Key -> CacheEntry map for one entity type, least recently used first."""

    def __init__(self, kind: str, ttl: timedelta, max_entries: int) -> None:
        self.kind = kind
        self.ttl = ttl
        self._max_entries = max_entries
        self._entries: OrderedDict[str, CacheEntry[T]] = OrderedDict()
        self.inflight: dict[str, asyncio.Task[tuple[T, ...]]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def fresh(self, key: str, now: datetime) -> CacheEntry[T] | None:
        entry = self._entries.get(key)
        if entry is None or now - entry.fetched_at > self.ttl:
            return None
        self._entries.move_to_end(key)
        return entry

    def put(self, key: str, entry: CacheEntry[T]) -> None:
        self._entries[key] = entry
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted %s cache entry %s", self.kind, evicted)

    def clear(self) -> None:
        self._entries.clear()


class EntityCache:
    def __init__(
        self,
        provider: InventoryProvider,
        weights: WeightProfileStore,
        flight_ttl: timedelta = FLIGHT_TTL,
        hotel_ttl: timedelta = HOTEL_TTL,
        max_entries: int = 256,
        provider_timeout: float | None = 10.0,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._provider = provider
        self._weights = weights
        self._provider_timeout = provider_timeout
        self._clock = clock
        self._max_entries = max_entries
        self._flights: _Bucket[FlightRecord] = _Bucket("flight", flight_ttl, max_entries)
        self._hotels: _Bucket[HotelRecord] = _Bucket("hotel", hotel_ttl, max_entries)

    @staticmethod
    def flight_key(origin_code: str, dest_code: str) -> str:
        return f"{origin_code}->{dest_code}"

    async def get_scored_flights(
        self, origin_code: str, dest_code: str
    ) -> tuple[FlightRecord, ...]:
        key = self.flight_key(origin_code, dest_code)
        return await self._get(
            self._flights, key, lambda: self._refresh_flights(origin_code, dest_code)
        )

    async def get_scored_hotels(self, city: str) -> tuple[HotelRecord, ...]:
        return await self._get(self._hotels, city, lambda: self._refresh_hotels(city))

    async def _get(
        self,
        bucket: _Bucket[T],
        key: str,
        refresh: Callable[[], Awaitable[list[T]]],
    ) -> tuple[T, ...]:
        entry = bucket.fresh(key, self._clock())
        if entry is not None:
            logger.debug("%s cache hit for %s", bucket.kind, key)
            return entry.payload

        task = bucket.inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._store(bucket, key, refresh))
            bucket.inflight[key] = task
            task.add_done_callback(lambda t: self._forget(bucket, key, t))
        else:
            logger.debug("Joining in-flight %s refresh for %s", bucket.kind, key)
        # Shielded so one cancelled caller does not cancel the shared refresh
        return await asyncio.shield(task)

    @staticmethod
    def _forget(bucket: _Bucket, key: str, task: asyncio.Task) -> None:
        if bucket.inflight.get(key) is task:
            del bucket.inflight[key]
        # Mark the exception retrieved when every waiter was cancelled
        if not task.cancelled():
            task.exception()

    async def _store(
        self,
        bucket: _Bucket[T],
        key: str,
        refresh: Callable[[], Awaitable[list[T]]],
    ) -> tuple[T, ...]:
        fetched_at = self._clock()
        payload = tuple(await refresh())
        bucket.put(key, CacheEntry(fetched_at=fetched_at, payload=payload))
        logger.info("Refreshed %s cache for %s (%d records)", bucket.kind, key, len(payload))
        return payload

    async def _fetch(self, kind: str, key: str, lookup: Awaitable[list[T]]) -> list[T]:
        try:
            records = await asyncio.wait_for(lookup, timeout=self._provider_timeout)
        except asyncio.TimeoutError as exc:
            raise InventoryProviderError(
                f"{kind} lookup for {key} timed out after {self._provider_timeout}s"
            ) from exc
        if not records:
            raise NoInventoryError(kind, key)
        return records

    async def _refresh_flights(self, origin_code: str, dest_code: str) -> list[FlightRecord]:
        key = self.flight_key(origin_code, dest_code)
        flights = await self._fetch(
            "flight", key, self._provider.lookup_flights(origin_code, dest_code)
        )
        benchmark = compute_flight_benchmark(flights)
        weights = await self._weights.load()
        return attach_flight_scores(flights, benchmark, weights)

    async def _refresh_hotels(self, city: str) -> list[HotelRecord]:
        hotels = await self._fetch("hotel", city, self._provider.lookup_hotels(city))
        benchmark = compute_hotel_benchmark(hotels)
        weights = await self._weights.load()
        return attach_hotel_scores(hotels, benchmark, weights)

    def stats(self) -> dict[str, int]:
        return {
            "flights": len(self._flights),
            "hotels": len(self._hotels),
            "max_entries": self._max_entries,
        }

    def clear(self) -> None:
        self._flights.clear()
        self._hotels.clear()
