import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import (
    InvalidParameterError,
    InventoryProviderError,
    MissingParameterError,
    RateLimitError,
    UnsupportedOriginError,
    UnsupportedProfileError,
    WeightProfileError,
)

logger = logging.getLogger(__name__)


async def missing_parameter_handler(_request: Request, exc: MissingParameterError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message, "missing": exc.missing},
    )


async def invalid_parameter_handler(_request: Request, exc: InvalidParameterError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message})


async def unsupported_profile_handler(_request: Request, exc: UnsupportedProfileError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message})


async def unsupported_origin_handler(_request: Request, exc: UnsupportedOriginError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message})


async def inventory_provider_error_handler(
    _request: Request, exc: InventoryProviderError
) -> JSONResponse:
    logger.error("Inventory provider error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=502,
        content={"detail": f"Inventory provider error: {exc.message}"},
    )


async def weight_profile_error_handler(_request: Request, exc: WeightProfileError) -> JSONResponse:
    logger.error("Weight profile error: %s", exc.message)
    return JSONResponse(
        status_code=503,
        content={"detail": f"Weight profiles unavailable: {exc.message}"},
    )


async def rate_limit_error_handler(_request: Request, exc: RateLimitError) -> JSONResponse:
    logger.warning("Rate limit hit for %s", exc.service)
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded for {exc.service}"},
    )
