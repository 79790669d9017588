"""Per-profile scoring of flights and hotels.

Every feature is reduced to a point in [MIN_SCORE, MAX_SCORE], then each
profile's weights combine the points into one score per profile. The
weighted sum is not normalized: weights summing to 1 keep the score on the
same [1, 10] scale.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from tripfinder.mappers.benchmarks import FlightBenchmark, HotelBenchmark
from tripfinder.schemas.inventory import FlightRecord, HotelRecord, Profile
from tripfinder.schemas.weights import FlightWeights, HotelWeights, WeightProfiles

MIN_SCORE = 1.0
MAX_SCORE = 10.0
SCORE_RANGE = MAX_SCORE - MIN_SCORE

STOP_PENALTY = 2.0

# (first hour, last hour, share of SCORE_RANGE above MIN_SCORE), narrowest first
TIME_BANDS = (
    (11, 15, 1.0),
    (9, 18, 0.9),
    (7, 21, 0.75),
)


def _clamp(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def round_half_up(value: float, places: int = 1) -> float:
    """Round to `places` decimals with exact halves going up (7.25 -> 7.3).

    The builtin `round` sends halves to the even digit instead.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def lower_is_better_point(value: float, low: float, high: float) -> float:
    """Linear point where `low` earns MAX_SCORE and `high` earns MIN_SCORE."""
    if high <= low:
        return MAX_SCORE
    return _clamp((high - value) / (high - low) * SCORE_RANGE + MIN_SCORE)


def higher_is_better_point(value: float, low: float, high: float) -> float:
    """Linear point where `high` earns MAX_SCORE and `low` earns MIN_SCORE."""
    if high <= low:
        return MAX_SCORE
    return _clamp((value - low) / (high - low) * SCORE_RANGE + MIN_SCORE)


def stops_point(num_stops: int) -> float:
    """Flat deduction per stop, not benchmark-normalized."""
    return _clamp(MAX_SCORE - num_stops * STOP_PENALTY)


def time_of_day_point(hour: int) -> float:
    """Banded point for a departure/arrival hour.

    Bands are inclusive on both ends and the narrowest matching band wins,
    so 11 and 15 score the maximum, 9 and 18 score 90%, 7 and 21 score 75%.
    """
    for first, last, share in TIME_BANDS:
        if first <= hour <= last:
            return MIN_SCORE + SCORE_RANGE * share
    return MIN_SCORE


def _weighted_flight_score(points: dict[str, float], weights: FlightWeights) -> float:
    score = (
        points["price"] * weights.price
        + points["duration"] * weights.duration
        + points["stops"] * weights.stops
        + points["departure_time"] * weights.departure_time
        + points["arrival_time"] * weights.arrival_time
    )
    return round_half_up(score)


def _weighted_hotel_score(points: dict[str, float], weights: HotelWeights) -> float:
    score = (
        points["price"] * weights.price
        + points["star"] * weights.star
        + points["rating"] * weights.rating
        + points["amenities"] * weights.amenities
    )
    return round_half_up(score)


def flight_points(flight: FlightRecord, benchmark: FlightBenchmark) -> dict[str, float]:
    return {
        "price": round_half_up(
            lower_is_better_point(flight.price, benchmark.min_price, benchmark.max_price), 2
        ),
        "duration": lower_is_better_point(
            flight.duration, benchmark.min_duration, benchmark.max_duration
        ),
        "stops": stops_point(len(flight.stops)),
        "departure_time": time_of_day_point(flight.departure_hour),
        "arrival_time": time_of_day_point(flight.arrival_hour),
    }


def hotel_points(hotel: HotelRecord, benchmark: HotelBenchmark) -> dict[str, float]:
    return {
        "price": lower_is_better_point(
            hotel.price_per_night, benchmark.min_price, benchmark.max_price
        ),
        "star": higher_is_better_point(hotel.stars, benchmark.min_stars, benchmark.max_stars),
        "rating": higher_is_better_point(
            hotel.rating, benchmark.min_rating, benchmark.max_rating
        ),
        "amenities": higher_is_better_point(
            len(hotel.amenities), benchmark.min_amenities, benchmark.max_amenities
        ),
    }


def score_flight(
    flight: FlightRecord, benchmark: FlightBenchmark, weights: WeightProfiles
) -> dict[Profile, float]:
    points = flight_points(flight, benchmark)
    return {
        profile: _weighted_flight_score(points, weights.for_profile(profile).flight)
        for profile in Profile
    }


def score_hotel(
    hotel: HotelRecord, benchmark: HotelBenchmark, weights: WeightProfiles
) -> dict[Profile, float]:
    points = hotel_points(hotel, benchmark)
    return {
        profile: _weighted_hotel_score(points, weights.for_profile(profile).hotel)
        for profile in Profile
    }


def attach_flight_scores(
    flights: list[FlightRecord], benchmark: FlightBenchmark, weights: WeightProfiles
) -> list[FlightRecord]:
    """Scored copies of `flights`; the inputs are left untouched."""
    return [
        f.model_copy(update={"scores": score_flight(f, benchmark, weights)}) for f in flights
    ]


def attach_hotel_scores(
    hotels: list[HotelRecord], benchmark: HotelBenchmark, weights: WeightProfiles
) -> list[HotelRecord]:
    return [
        h.model_copy(update={"scores": score_hotel(h, benchmark, weights)}) for h in hotels
    ]
