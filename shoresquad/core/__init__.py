"""Core configuration, models and exceptions."""

from shoresquad.core.config import load_config
from shoresquad.core.exceptions import (
    ConfigError,
    CrewError,
    GeolocationError,
    ShoreSquadError,
    StorageError,
    UnknownBeachError,
    WeatherError,
)
from shoresquad.core.models import (
    ApiConfig,
    AppConfig,
    Coordinates,
    Defaults,
    StorageKeys,
)

__all__ = [
    # Config
    "load_config",
    # Exceptions
    "ShoreSquadError",
    "ConfigError",
    "StorageError",
    "WeatherError",
    "GeolocationError",
    "UnknownBeachError",
    "CrewError",
    # Models
    "AppConfig",
    "ApiConfig",
    "StorageKeys",
    "Defaults",
    "Coordinates",
]
