from typing import Annotated

from fastapi import Depends, Request

from tripfinder.services.entity_cache import EntityCache
from tripfinder.services.recommender import TripRecommender


def get_recommender(request: Request) -> TripRecommender:
    return request.app.state.recommender


def get_entity_cache(request: Request) -> EntityCache:
    return request.app.state.entity_cache


RecommenderDep = Annotated[TripRecommender, Depends(get_recommender)]
EntityCacheDep = Annotated[EntityCache, Depends(get_entity_cache)]
