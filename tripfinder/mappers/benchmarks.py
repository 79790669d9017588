from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tripfinder.schemas.inventory import FlightRecord, HotelRecord

# Qualitative hotel bounds are fixed, not derived from the batch
HOTEL_MIN_STARS = 1
HOTEL_MAX_STARS = 5
HOTEL_MIN_RATING = 3.0
HOTEL_MAX_RATING = 10.0
HOTEL_MIN_AMENITIES = 1
HOTEL_MAX_AMENITIES = 6


@dataclass(frozen=True)
class FlightBenchmark:
    min_price: float
    max_price: float
    min_duration: float
    max_duration: float


@dataclass(frozen=True)
class HotelBenchmark:
    min_price: float
    max_price: float
    min_stars: int = HOTEL_MIN_STARS
    max_stars: int = HOTEL_MAX_STARS
    min_rating: float = HOTEL_MIN_RATING
    max_rating: float = HOTEL_MAX_RATING
    min_amenities: int = HOTEL_MIN_AMENITIES
    max_amenities: int = HOTEL_MAX_AMENITIES


def compute_flight_benchmark(flights: Sequence[FlightRecord]) -> FlightBenchmark:
    """Price and duration bounds of a non-empty flight batch."""
    if not flights:
        raise ValueError("cannot benchmark an empty flight batch")
    prices = [f.price for f in flights]
    durations = [f.duration for f in flights]
    return FlightBenchmark(
        min_price=min(prices),
        max_price=max(prices),
        min_duration=min(durations),
        max_duration=max(durations),
    )


def compute_hotel_benchmark(hotels: Sequence[HotelRecord]) -> HotelBenchmark:
    """Nightly price bounds of a non-empty hotel batch, plus the fixed bounds."""
    if not hotels:
        raise ValueError("cannot benchmark an empty hotel batch")
    prices = [h.price_per_night for h in hotels]
    return HotelBenchmark(min_price=min(prices), max_price=max(prices))
