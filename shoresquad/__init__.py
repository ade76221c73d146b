"""ShoreSquad - beach cleanup organizer."""

from shoresquad.app import ShoreSquadApp
from shoresquad.beaches import SINGAPORE_BEACHES, Beach, BeachSelector
from shoresquad.core import (
    AppConfig,
    ConfigError,
    Coordinates,
    CrewError,
    GeolocationError,
    ShoreSquadError,
    StorageError,
    UnknownBeachError,
    WeatherError,
    load_config,
)
from shoresquad.crew import CrewManager
from shoresquad.location import GeolocationService, PositionProvider, StaticPositionProvider
from shoresquad.storage import (
    CacheEntry,
    CacheLookup,
    FileStore,
    KeyValueStore,
    LookupStatus,
    MemoryStore,
    StorageManager,
)
from shoresquad.weather import WeatherService

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # App
    "ShoreSquadApp",
    # Config
    "AppConfig",
    "Coordinates",
    "load_config",
    # Exceptions
    "ShoreSquadError",
    "ConfigError",
    "StorageError",
    "WeatherError",
    "GeolocationError",
    "UnknownBeachError",
    "CrewError",
    # Storage
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "StorageManager",
    "CacheEntry",
    "CacheLookup",
    "LookupStatus",
    # Services
    "WeatherService",
    "GeolocationService",
    "PositionProvider",
    "StaticPositionProvider",
    "CrewManager",
    "BeachSelector",
    "Beach",
    "SINGAPORE_BEACHES",
]
