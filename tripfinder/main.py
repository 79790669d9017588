import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from tripfinder.config import Settings
from tripfinder.exceptions.custom import (
    InvalidParameterError,
    InventoryProviderError,
    MissingParameterError,
    RateLimitError,
    UnsupportedOriginError,
    UnsupportedProfileError,
    WeightProfileError,
)
from tripfinder.exceptions.handlers import (
    invalid_parameter_handler,
    inventory_provider_error_handler,
    missing_parameter_handler,
    rate_limit_error_handler,
    unsupported_origin_handler,
    unsupported_profile_handler,
    weight_profile_error_handler,
)
from tripfinder.routers.trips import router as trips_router
from tripfinder.services.entity_cache import EntityCache
from tripfinder.services.inventory import (
    HttpInventoryProvider,
    InventoryProvider,
    JsonFileInventoryProvider,
)
from tripfinder.services.recommender import TripRecommender
from tripfinder.services.weights import WeightProfileStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient(timeout=settings.provider_timeout) as client:
        provider: InventoryProvider
        if settings.inventory_base_url:
            provider = HttpInventoryProvider(client, settings.inventory_base_url)
        else:
            provider = JsonFileInventoryProvider(settings.flights_path, settings.hotels_path)

        cache = EntityCache(
            provider,
            WeightProfileStore(settings.weights_path),
            flight_ttl=settings.flight_cache_ttl,
            hotel_ttl=settings.hotel_cache_ttl,
            max_entries=settings.cache_max_entries,
            provider_timeout=settings.provider_timeout,
        )

        app.state.entity_cache = cache
        app.state.recommender = TripRecommender(
            cache,
            settings.cities,
            top_n=settings.top_n,
            max_candidates=settings.max_candidates,
        )

        yield


app = FastAPI(title="Tripfinder", lifespan=lifespan)

app.add_exception_handler(MissingParameterError, missing_parameter_handler)
app.add_exception_handler(InvalidParameterError, invalid_parameter_handler)
app.add_exception_handler(UnsupportedProfileError, unsupported_profile_handler)
app.add_exception_handler(UnsupportedOriginError, unsupported_origin_handler)
app.add_exception_handler(InventoryProviderError, inventory_provider_error_handler)
app.add_exception_handler(WeightProfileError, weight_profile_error_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)

app.include_router(trips_router)
