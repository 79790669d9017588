from __future__ import annotations

from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Profile(StrEnum):
    balanced = "balanced"
    luxury = "luxury"
    affordable = "affordable"


def _parse_hour(value: str) -> int:
    """Hour component of an "H:MM" / "HH:MM" time of day."""
    return int(value.split(":")[0])


class FlightRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    origin: str = Field(
        validation_alias=AliasChoices("origin", "from"), serialization_alias="from"
    )
    destination: str = Field(
        validation_alias=AliasChoices("destination", "to"), serialization_alias="to"
    )
    stops: list[str] = []
    price: float = Field(gt=0)
    departure_time: str
    arrival_time: str
    duration: float = Field(
        gt=0, validation_alias=AliasChoices("duration", "hours"), serialization_alias="hours"
    )
    scores: dict[Profile, float] = {}

    @field_validator("departure_time", "arrival_time")
    @classmethod
    def _check_time_of_day(cls, value: str) -> str:
        try:
            hour = _parse_hour(value)
        except ValueError as exc:
            raise ValueError(f"invalid time of day: {value!r}") from exc
        if not 0 <= hour <= 23:
            raise ValueError(f"hour out of range: {value!r}")
        return value

    @property
    def departure_hour(self) -> int:
        return _parse_hour(self.departure_time)

    @property
    def arrival_hour(self) -> int:
        return _parse_hour(self.arrival_time)

    @property
    def route(self) -> str:
        return f"{self.origin}->{self.destination}"


class HotelRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    address: str
    stars: int = Field(ge=1, le=5)
    rating: float = Field(ge=0, le=10)
    amenities: list[str] = []
    price_per_night: float = Field(gt=0)
    scores: dict[Profile, float] = {}

    @property
    def city(self) -> str | None:
        """City token of "street, city, country" addresses."""
        parts = self.address.split(",")
        if len(parts) < 2:
            return None
        return parts[1].strip()
