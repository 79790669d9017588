import logging

from fastapi import APIRouter, HTTPException

from tripfinder.dependencies import EntityCacheDep, RecommenderDep
from tripfinder.mappers.search_params import parse_search_params
from tripfinder.schemas.trip import CacheStatsResponse, SearchParams, Trip
from tripfinder.services.recommender import TripRecommender

logger = logging.getLogger(__name__)

router = APIRouter()


async def _recommend(service: TripRecommender, params: SearchParams) -> list[Trip]:
    logger.info(
        "You are searching for a %s trip from %s for %d nights with a budget of $%s.",
        params.profile, params.origin, params.nights, params.budget,
    )
    trips = await service.search(params)
    if not trips:
        raise HTTPException(
            status_code=404,
            detail=(
                f"No trip is found for {params.profile} trip from {params.origin} "
                f"for {params.nights} nights with a budget of ${params.budget:g}."
            ),
        )
    return trips


@router.get("/trips", response_model=list[Trip])
async def search_trips(
    service: RecommenderDep,
    origin: str | None = None,
    nights: str | None = None,
    budget: str | None = None,
    type: str | None = None,
) -> list[Trip]:
    params = parse_search_params(origin, nights, budget, type, service.cities)
    return await _recommend(service, params)


@router.get(
    "/origin/{origin}/nights/{nights}/budget/{budget}/type/{type}",
    response_model=list[Trip],
)
async def search_trips_by_path(
    service: RecommenderDep,
    origin: str,
    nights: str,
    budget: str,
    type: str,
) -> list[Trip]:
    params = parse_search_params(origin, nights, budget, type, service.cities)
    return await _recommend(service, params)


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(cache: EntityCacheDep) -> CacheStatsResponse:
    return CacheStatsResponse(**cache.stats())
