from datetime import timedelta
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_CITIES = {
    "New York City": "JFK",
    "Los Angeles": "LAX",
    "London": "LHR",
    "Tokyo": "NRT",
    "Sydney": "SYD",
}


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Flat-file inventory and weight document
    data_dir: Path = Path("data")
    flights_file: str = "flights.json"
    hotels_file: str = "hotels.json"
    weights_file: str = "score-weights.json"

    # HTTP inventory, used instead of the flat files when set
    inventory_base_url: str = ""
    provider_timeout: float = Field(default=10.0, gt=0)

    # Entity cache
    flight_cache_ttl_hours: int = Field(default=24, gt=0)
    hotel_cache_ttl_days: int = Field(default=30, gt=0)
    cache_max_entries: int = Field(default=256, gt=0)

    # Search
    top_n: int = Field(default=1, gt=0)
    max_candidates: int = Field(default=1_000_000, gt=0)
    cities: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CITIES))

    log_level: str = "INFO"

    @property
    def flight_cache_ttl(self) -> timedelta:
        return timedelta(hours=self.flight_cache_ttl_hours)

    @property
    def hotel_cache_ttl(self) -> timedelta:
        return timedelta(days=self.hotel_cache_ttl_days)

    @property
    def flights_path(self) -> Path:
        return self.data_dir / self.flights_file

    @property
    def hotels_path(self) -> Path:
        return self.data_dir / self.hotels_file

    @property
    def weights_path(self) -> Path:
        return self.data_dir / self.weights_file
