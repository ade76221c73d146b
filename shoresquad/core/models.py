"""Core data models for ShoreSquad."""

from pathlib import Path

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Latitude/longitude pair."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    accuracy: float | None = None


class ApiConfig(BaseModel):
    """Weather API settings."""

    weather_base_url: str = "https://api.openweathermap.org/data/2.5"
    geocoding_base_url: str = "https://api.openweathermap.org/geo/1.0"
    weather_api_key: str | None = None
    timeout: float = 10.0
    max_retries: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=1.0, ge=0)


class StorageKeys(BaseModel):
    """Namespaced storage keys owned by the application."""

    user_prefs: str = "shoresquad-user-prefs"
    crew_data: str = "shoresquad-crew-data"
    cleanup_stats: str = "shoresquad-cleanup-stats"
    weather_cache: str = "shoresquad-weather-cache"
    last_location: str = "shoresquad-last-location"
    selected_beach: str = "shoresquad-selected-beach"

    def namespace(self) -> tuple[str, ...]:
        """Return every key this application owns."""
        return tuple(self.model_dump().values())


class Defaults(BaseModel):
    """Fallback values and freshness bounds."""

    # Redondo Beach, CA
    location: Coordinates = Field(default_factory=lambda: Coordinates(lat=33.7490, lng=-118.4065))
    weather_cache_duration_ms: int = 10 * 60 * 1000
    location_max_age_ms: int = 5 * 60 * 1000


class AppConfig(BaseModel):
    """Application configuration."""

    name: str = "ShoreSquad"
    version: str = "1.0.0"
    api: ApiConfig = Field(default_factory=ApiConfig)
    storage: StorageKeys = Field(default_factory=StorageKeys)
    defaults: Defaults = Field(default_factory=Defaults)
    storage_path: Path = Field(default_factory=lambda: Path.home() / ".shoresquad" / "storage.json")
