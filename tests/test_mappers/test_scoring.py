"""Tests for feature points and per-profile scores."""

import pytest

from tripfinder.mappers.benchmarks import compute_flight_benchmark, compute_hotel_benchmark
from tripfinder.mappers.scoring import (
    MAX_SCORE,
    MIN_SCORE,
    attach_flight_scores,
    attach_hotel_scores,
    flight_points,
    higher_is_better_point,
    lower_is_better_point,
    round_half_up,
    score_flight,
    score_hotel,
    stops_point,
    time_of_day_point,
)
from tripfinder.schemas.inventory import Profile


# --- feature points ---


def test_lower_is_better_point_endpoints():
    assert lower_is_better_point(100, 100, 200) == MAX_SCORE
    assert lower_is_better_point(200, 100, 200) == MIN_SCORE
    assert lower_is_better_point(150, 100, 200) == pytest.approx(5.5)


def test_degenerate_range_scores_max():
    """A batch where every record has the same value earns the top point."""
    assert lower_is_better_point(100, 100, 100) == MAX_SCORE
    assert higher_is_better_point(4, 4, 4) == MAX_SCORE


def test_higher_is_better_point():
    assert higher_is_better_point(5, 1, 5) == MAX_SCORE
    assert higher_is_better_point(1, 1, 5) == MIN_SCORE
    assert higher_is_better_point(3, 1, 5) == pytest.approx(5.5)


def test_points_clamp_outside_fixed_bounds():
    assert higher_is_better_point(2.0, 3.0, 10.0) == MIN_SCORE
    assert higher_is_better_point(0, 1, 6) == MIN_SCORE
    assert higher_is_better_point(8, 1, 6) == MAX_SCORE


def test_stops_point_flat_penalty():
    assert stops_point(0) == 10
    assert stops_point(1) == 8
    assert stops_point(2) == 6
    assert stops_point(7) == MIN_SCORE


@pytest.mark.parametrize(
    "hour,expected",
    [
        (11, 10.0), (13, 10.0), (15, 10.0),
        (9, 9.1), (10, 9.1), (16, 9.1), (18, 9.1),
        (7, 7.75), (8, 7.75), (19, 7.75), (21, 7.75),
        (0, 1.0), (6, 1.0), (22, 1.0), (23, 1.0),
    ],
)
def test_time_of_day_bands(hour, expected):
    """Bands are inclusive; the narrowest matching band wins."""
    assert time_of_day_point(hour) == pytest.approx(expected)


# --- flight scores ---


def test_best_flight_scores_max_for_every_profile(make_flight, weights):
    best = make_flight(price=300, duration=5, departure_time="12:00", arrival_time="13:00")
    worst = make_flight(price=600, duration=9)
    bench = compute_flight_benchmark([best, worst])

    scores = score_flight(best, bench, weights)
    assert scores == {Profile.balanced: 10.0, Profile.luxury: 10.0, Profile.affordable: 10.0}


def test_worst_flight_balanced_score(make_flight, weights):
    best = make_flight(price=300, duration=5)
    worst = make_flight(
        price=600, duration=9, stops=["AAA", "BBB"], departure_time="5:00", arrival_time="23:00"
    )
    bench = compute_flight_benchmark([best, worst])

    # 1*.3 + 1*.25 + 6*.2 + 1*.125 + 1*.125
    assert score_flight(worst, bench, weights)[Profile.balanced] == 2.0


def test_cheaper_flight_never_scores_lower_on_price(make_flight, weights):
    cheap = make_flight(price=350)
    pricey = make_flight(price=450)
    bench = compute_flight_benchmark([cheap, pricey, make_flight(price=600)])

    for profile in Profile:
        assert score_flight(cheap, bench, weights)[profile] >= score_flight(pricey, bench, weights)[profile]


def test_attach_flight_scores_returns_scored_copies(make_flight, weights):
    flights = [make_flight(price=300), make_flight(price=500, stops=["XYZ"]), make_flight(price=900)]
    bench = compute_flight_benchmark(flights)

    scored = attach_flight_scores(flights, bench, weights)

    assert all(f.scores == {} for f in flights)
    for record in scored:
        assert set(record.scores) == set(Profile)
        for value in record.scores.values():
            assert MIN_SCORE <= value <= MAX_SCORE
            assert value == round(value, 1)


# --- hotel scores ---


def test_hotel_scores_in_range(make_hotel, weights):
    hotels = [
        make_hotel(price=60, stars=1, rating=2.5, amenities=[]),
        make_hotel(price=500, stars=5, rating=10.0, amenities=["a", "b", "c", "d", "e", "f", "g"]),
        make_hotel(price=200, stars=3, rating=7.0),
    ]
    bench = compute_hotel_benchmark(hotels)

    for record in attach_hotel_scores(hotels, bench, weights):
        assert set(record.scores) == set(Profile)
        for value in record.scores.values():
            assert MIN_SCORE <= value <= MAX_SCORE


def test_luxury_prefers_stars_over_price(make_hotel, weights):
    budget_hotel = make_hotel(price=60, stars=2, rating=6.0, amenities=["Free Wi-Fi"])
    luxe_hotel = make_hotel(price=450, stars=5, rating=9.5, amenities=["a", "b", "c", "d", "e", "f"])
    bench = compute_hotel_benchmark([budget_hotel, luxe_hotel])

    budget_scores = score_hotel(budget_hotel, bench, weights)
    luxe_scores = score_hotel(luxe_hotel, bench, weights)

    assert luxe_scores[Profile.luxury] > budget_scores[Profile.luxury]
    assert budget_scores[Profile.affordable] > luxe_scores[Profile.affordable]


def test_hotel_exact_score(make_hotel, weights):
    cheap = make_hotel(price=100, stars=5, rating=10.0, amenities=["a", "b", "c", "d", "e", "f"])
    pricey = make_hotel(price=200)
    bench = compute_hotel_benchmark([cheap, pricey])

    assert score_hotel(cheap, bench, weights) == {
        Profile.balanced: 10.0,
        Profile.luxury: 10.0,
        Profile.affordable: 10.0,
    }


# --- rounding ---


@pytest.mark.parametrize(
    "value,places,expected",
    [
        (7.25, 1, 7.3),
        (8.25, 1, 8.3),
        (7.75, 1, 7.8),
        (7.24, 1, 7.2),
        (0.125, 2, 0.13),
        (10.0, 1, 10.0),
    ],
)
def test_round_half_up(value, places, expected):
    assert round_half_up(value, places) == expected


def test_round_half_up_differs_from_builtin_on_halves():
    assert round(8.25, 1) == 8.2
    assert round_half_up(8.25) == 8.3


def test_flight_price_point_kept_to_two_decimals(make_flight):
    flights = [make_flight(price=300), make_flight(price=400), make_flight(price=1000)]
    bench = compute_flight_benchmark(flights)

    # (1000 - 400) / 700 * 9 + 1 = 8.714...
    assert flight_points(flights[1], bench)["price"] == 8.71
    assert flight_points(flights[0], bench)["price"] == MAX_SCORE
