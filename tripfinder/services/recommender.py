import asyncio
import heapq
import logging
from collections.abc import Iterator

from tripfinder.exceptions.custom import NoInventoryError
from tripfinder.mappers.scoring import round_half_up
from tripfinder.schemas.inventory import FlightRecord, HotelRecord, Profile
from tripfinder.schemas.trip import SearchParams, Trip
from tripfinder.services.entity_cache import EntityCache

logger = logging.getLogger(__name__)


def trip_score(
    outbound: FlightRecord, inbound: FlightRecord, hotel: HotelRecord, profile: Profile
) -> float:
    """Composite trip score on the 1-10 scale of its three components."""
    total = outbound.scores[profile] + inbound.scores[profile] + hotel.scores[profile]
    return round_half_up(total / 30 * 10)


def trip_price(
    outbound: FlightRecord, inbound: FlightRecord, hotel: HotelRecord, nights: int
) -> float:
    return outbound.price + inbound.price + hotel.price_per_night * nights


class TripRecommender:
    def __init__(
        self,
        cache: EntityCache,
        cities: dict[str, str],
        top_n: int = 1,
        max_candidates: int = 1_000_000,
    ):
        if top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {top_n}")
        self._cache = cache
        self._cities = dict(cities)
        self._top_n = top_n
        self._max_candidates = max_candidates

    @property
    def cities(self) -> dict[str, str]:
        return dict(self._cities)

    async def _destination_inventory(
        self, origin_code: str, dest_city: str, dest_code: str
    ) -> tuple[tuple[FlightRecord, ...], tuple[FlightRecord, ...], tuple[HotelRecord, ...]] | None:
        """Scored outbound flights, return flights and hotels, or None to skip."""
        results = await asyncio.gather(
            self._cache.get_scored_flights(origin_code, dest_code),
            self._cache.get_scored_flights(dest_code, origin_code),
            self._cache.get_scored_hotels(dest_city),
            return_exceptions=True,
        )
        # Any failure other than missing inventory aborts the whole search
        for res in results:
            if isinstance(res, BaseException) and not isinstance(res, NoInventoryError):
                raise res
        for res in results:
            if isinstance(res, NoInventoryError):
                logger.warning("Skipping %s: %s", dest_city, res)
                return None
        return results[0], results[1], results[2]

    def _feasible_triples(
        self,
        params: SearchParams,
        outbound: tuple[FlightRecord, ...],
        inbound: tuple[FlightRecord, ...],
        hotels: tuple[HotelRecord, ...],
    ) -> Iterator[tuple[float, FlightRecord, FlightRecord, HotelRecord]]:
        """(price, outbound, return, hotel) for every triple within budget.

        Legs are walked cheapest first so each loop can stop as soon as the
        cheapest completion of the current prefix exceeds the budget.
        """
        outbound = sorted(outbound, key=lambda f: f.price)
        inbound = sorted(inbound, key=lambda f: f.price)
        hotels = sorted(hotels, key=lambda h: h.price_per_night)
        cheapest_stay = hotels[0].price_per_night * params.nights

        for out_flight in outbound:
            if out_flight.price + inbound[0].price + cheapest_stay > params.budget:
                break
            for ret_flight in inbound:
                if out_flight.price + ret_flight.price + cheapest_stay > params.budget:
                    break
                for hotel in hotels:
                    price = trip_price(out_flight, ret_flight, hotel, params.nights)
                    if price > params.budget:
                        break
                    yield price, out_flight, ret_flight, hotel

    async def search(self, params: SearchParams, top_n: int | None = None) -> list[Trip]:
        """Top trips for the request, highest score first.

        Equal scores are ordered by lower total price, then by enumeration
        order. An empty list means no triple fits the budget.
        """
        n = self._top_n if top_n is None else top_n
        if n < 1:
            raise ValueError(f"top_n must be at least 1, got {n}")

        # Min-heap on (score, -price, -seq): the root is the worst kept trip
        best: list[tuple[float, float, int, Trip]] = []
        seq = 0
        for dest_city, dest_code in self._cities.items():
            if dest_city == params.origin:
                continue
            inventory = await self._destination_inventory(params.origin_code, dest_city, dest_code)
            if inventory is None:
                continue
            for price, out_flight, ret_flight, hotel in self._feasible_triples(params, *inventory):
                if seq >= self._max_candidates:
                    break
                score = trip_score(out_flight, ret_flight, hotel, params.profile)
                rank = (score, -price, -seq)
                seq += 1
                if len(best) == n and rank <= best[0][:3]:
                    continue
                trip = Trip(
                    destination=dest_city,
                    profile=params.profile,
                    budget=params.budget,
                    nights=params.nights,
                    price=price,
                    score=score,
                    outbound_flight=out_flight,
                    return_flight=ret_flight,
                    hotel=hotel,
                )
                if len(best) < n:
                    heapq.heappush(best, (*rank, trip))
                else:
                    heapq.heapreplace(best, (*rank, trip))
            if seq >= self._max_candidates:
                logger.warning(
                    "Candidate limit %d reached; remaining triples not evaluated",
                    self._max_candidates,
                )
                break

        trips = [entry[3] for entry in sorted(best, reverse=True)]
        logger.info("Evaluated %d feasible trips, returning %d", seq, len(trips))
        return trips
