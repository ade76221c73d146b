"""Application wiring: one storage manager shared by every service."""

import logging
from typing import Optional

from shoresquad.beaches import BeachSelector
from shoresquad.core import AppConfig, Coordinates
from shoresquad.crew import CrewManager
from shoresquad.location import GeolocationService, PositionProvider
from shoresquad.storage import FileStore, KeyValueStore, StorageManager
from shoresquad.weather import ForecastDay, WeatherReading, WeatherService

logger = logging.getLogger(__name__)


class ShoreSquadApp:
    """Builds the services around a single store."""

    def __init__(
        self,
        config: AppConfig,
        store: Optional[KeyValueStore] = None,
        provider: Optional[PositionProvider] = None,
    ) -> None:
        self.config = config
        self.storage = StorageManager(
            store if store is not None else FileStore(config.storage_path),
            namespace_keys=config.storage.namespace(),
            schema_version=config.version,
        )
        self.geolocation = GeolocationService(self.storage, config, provider)
        self.weather = WeatherService(config, self.storage)
        self.crew = CrewManager(self.storage, config)
        self.beaches = BeachSelector(self.storage, config)

    async def load_weather(self) -> tuple[Coordinates, WeatherReading, list[ForecastDay]]:
        """Locate the user and fetch current weather and forecast there."""
        location = self.geolocation.get_current_position()
        logger.info(f"Location acquired: {location.lat}, {location.lng}")
        current = await self.weather.get_current_weather(location.lat, location.lng)
        forecast = await self.weather.get_forecast(location.lat, location.lng)
        return location, current, forecast

    def clear(self) -> bool:
        """Forget all application data."""
        return self.storage.clear()

    async def close(self) -> None:
        await self.weather.close()
