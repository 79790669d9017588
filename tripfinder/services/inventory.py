import asyncio
import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import httpx
from pydantic import TypeAdapter, ValidationError

from tripfinder.exceptions.custom import InventoryProviderError, RateLimitError
from tripfinder.schemas.inventory import FlightRecord, HotelRecord

logger = logging.getLogger(__name__)

_FLIGHTS = TypeAdapter(list[FlightRecord])
_HOTELS = TypeAdapter(list[HotelRecord])


@runtime_checkable
class InventoryProvider(Protocol):
    """Source of unscored flight and hotel records.

    Either lookup may return an empty list; callers decide what that means.
    """

    async def lookup_flights(self, origin_code: str, dest_code: str) -> list[FlightRecord]:
        ...

    async def lookup_hotels(self, city: str) -> list[HotelRecord]:
        ...


def _read_json(path: Path) -> object:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


class JsonFileInventoryProvider:
    """Flat-file inventory: one JSON array of flights and one of hotels.

    Files are re-read on every lookup so regenerated inventory is picked up
    by the next cache refresh.
    """

    def __init__(self, flights_path: Path, hotels_path: Path):
        self._flights_path = flights_path
        self._hotels_path = hotels_path

    async def _load(self, path: Path, adapter: TypeAdapter):
        try:
            raw = await asyncio.to_thread(_read_json, path)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Failed to read inventory file %s: %s", path, exc)
            raise InventoryProviderError(f"Cannot read {path}: {exc}") from exc
        try:
            return adapter.validate_python(raw)
        except ValidationError as exc:
            raise InventoryProviderError(f"Invalid records in {path}: {exc}") from exc

    async def lookup_flights(self, origin_code: str, dest_code: str) -> list[FlightRecord]:
        flights = await self._load(self._flights_path, _FLIGHTS)
        return [f for f in flights if f.origin == origin_code and f.destination == dest_code]

    async def lookup_hotels(self, city: str) -> list[HotelRecord]:
        hotels = await self._load(self._hotels_path, _HOTELS)
        return [h for h in hotels if h.city == city]


class HttpInventoryProvider:
    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def _get(self, path: str, params: dict[str, str]) -> object:
        url = f"{self._base_url}{path}"
        logger.debug("GET %s %s", url, params)
        try:
            resp = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise InventoryProviderError(f"Request to {url} failed: {exc}") from exc

        if resp.status_code == 429:
            raise RateLimitError("Inventory")
        if resp.status_code >= 400:
            raise InventoryProviderError(resp.text, status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise InventoryProviderError(f"Non-JSON response from {url}") from exc

    async def lookup_flights(self, origin_code: str, dest_code: str) -> list[FlightRecord]:
        data = await self._get("/flights", {"origin": origin_code, "destination": dest_code})
        try:
            flights = _FLIGHTS.validate_python(data)
        except ValidationError as exc:
            raise InventoryProviderError(f"Invalid flight records: {exc}") from exc
        # The upstream may ignore filters; keep exact code matches only
        return [f for f in flights if f.origin == origin_code and f.destination == dest_code]

    async def lookup_hotels(self, city: str) -> list[HotelRecord]:
        data = await self._get("/hotels", {"city": city})
        try:
            hotels = _HOTELS.validate_python(data)
        except ValidationError as exc:
            raise InventoryProviderError(f"Invalid hotel records: {exc}") from exc
        return [h for h in hotels if h.city == city]
