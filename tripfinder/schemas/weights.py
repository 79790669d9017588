from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tripfinder.schemas.inventory import Profile


class FlightWeights(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price: float = Field(ge=0)
    duration: float = Field(ge=0)
    stops: float = Field(ge=0)
    departure_time: float = Field(
        ge=0, validation_alias=AliasChoices("departure_time", "departureTime")
    )
    arrival_time: float = Field(
        ge=0, validation_alias=AliasChoices("arrival_time", "arrivalTime")
    )


class HotelWeights(BaseModel):
    price: float = Field(ge=0)
    star: float = Field(ge=0)
    rating: float = Field(ge=0)
    amenities: float = Field(ge=0)


class ProfileWeights(BaseModel):
    flight: FlightWeights
    hotel: HotelWeights


class WeightProfiles(BaseModel):
    """The weight document: one flight/hotel weight set per profile."""

    balanced: ProfileWeights
    luxury: ProfileWeights
    affordable: ProfileWeights

    def for_profile(self, profile: Profile) -> ProfileWeights:
        return getattr(self, Profile(profile).value)
