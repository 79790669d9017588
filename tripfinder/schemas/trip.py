from __future__ import annotations

from pydantic import BaseModel, Field

from tripfinder.schemas.inventory import FlightRecord, HotelRecord, Profile


class SearchParams(BaseModel):
    origin: str
    origin_code: str
    nights: int = Field(ge=1)
    budget: float = Field(gt=0)
    profile: Profile


class Trip(BaseModel):
    destination: str
    profile: Profile
    budget: float
    nights: int
    price: float
    score: float
    outbound_flight: FlightRecord
    return_flight: FlightRecord
    hotel: HotelRecord


class CacheStatsResponse(BaseModel):
    flights: int
    hotels: int
    max_entries: int
