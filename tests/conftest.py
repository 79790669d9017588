import asyncio
from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx
import pytest
from httpx import ASGITransport

from tripfinder.schemas.inventory import FlightRecord, HotelRecord
from tripfinder.schemas.weights import WeightProfiles

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

WEIGHTS_DOC = {
    "balanced": {
        "flight": {"price": 0.3, "duration": 0.25, "stops": 0.2, "departureTime": 0.125, "arrivalTime": 0.125},
        "hotel": {"price": 0.3, "star": 0.25, "rating": 0.3, "amenities": 0.15},
    },
    "luxury": {
        "flight": {"price": 0.05, "duration": 0.35, "stops": 0.3, "departureTime": 0.15, "arrivalTime": 0.15},
        "hotel": {"price": 0.05, "star": 0.4, "rating": 0.35, "amenities": 0.2},
    },
    "affordable": {
        "flight": {"price": 0.6, "duration": 0.15, "stops": 0.1, "departureTime": 0.075, "arrivalTime": 0.075},
        "hotel": {"price": 0.6, "star": 0.1, "rating": 0.2, "amenities": 0.1},
    },
}


def flight(origin="JFK", destination="LAX", price=500.0, duration=6.0, stops=(),
           departure_time="12:00", arrival_time="18:00", scores=None) -> FlightRecord:
    return FlightRecord(
        origin=origin,
        destination=destination,
        stops=list(stops),
        price=price,
        departure_time=departure_time,
        arrival_time=arrival_time,
        duration=duration,
        scores=scores or {},
    )


def hotel(city="Los Angeles", name="Test Hotel", price=100.0, stars=4, rating=8.0,
          amenities=("Free Wi-Fi", "Bar"), scores=None) -> HotelRecord:
    return HotelRecord(
        name=name,
        address=f"1 Main Street, {city}, Somewhere",
        stars=stars,
        rating=rating,
        amenities=list(amenities),
        price_per_night=price,
        scores=scores or {},
    )


class FakeProvider:
    """In-memory inventory that counts lookups."""

    def __init__(self, flights=None, hotels=None, delay: float = 0.0, error: Exception | None = None):
        self.flights: dict[tuple[str, str], list[FlightRecord]] = flights or {}
        self.hotels: dict[str, list[HotelRecord]] = hotels or {}
        self.delay = delay
        self.error = error
        self.flight_calls = 0
        self.hotel_calls = 0

    async def lookup_flights(self, origin_code, dest_code):
        self.flight_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return list(self.flights.get((origin_code, dest_code), []))

    async def lookup_hotels(self, city):
        self.hotel_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return list(self.hotels.get(city, []))


class FakeWeightStore:
    def __init__(self, doc=None):
        self.doc = doc or WEIGHTS_DOC
        self.loads = 0

    async def load(self) -> WeightProfiles:
        self.loads += 1
        return WeightProfiles.model_validate(self.doc)


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def weights() -> WeightProfiles:
    return WeightProfiles.model_validate(WEIGHTS_DOC)


@pytest.fixture
def make_flight():
    return flight


@pytest.fixture
def make_hotel():
    return hotel


@pytest.fixture
def provider_cls():
    return FakeProvider


@pytest.fixture
def weight_store():
    return FakeWeightStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(DATA_DIR))
    monkeypatch.delenv("INVENTORY_BASE_URL", raising=False)


@pytest.fixture
async def client(mock_env):
    from tripfinder.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
