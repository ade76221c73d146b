"""Position acquisition with cached and default fallbacks."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import ValidationError

from shoresquad.core import AppConfig, Coordinates, GeolocationError
from shoresquad.storage import StorageManager

logger = logging.getLogger(__name__)


class PositionProvider(ABC):
    """Source of the user's current position."""

    @abstractmethod
    def get_position(self) -> Coordinates:
        """Return the current position.

        Raises:
            GeolocationError: If no position is available
        """
        pass


class StaticPositionProvider(PositionProvider):
    """Serves a fixed position, e.g. one given on the command line."""

    def __init__(self, lat: float, lng: float, accuracy: Optional[float] = None) -> None:
        try:
            self.coordinates = Coordinates(lat=lat, lng=lng, accuracy=accuracy)
        except ValidationError as e:
            raise GeolocationError(f"Invalid coordinates ({lat}, {lng})") from e

    def get_position(self) -> Coordinates:
        return self.coordinates


class GeolocationService:
    """Resolves the user's location, remembering the last good fix."""

    def __init__(
        self,
        storage: StorageManager,
        config: AppConfig,
        provider: Optional[PositionProvider] = None,
    ) -> None:
        self.storage = storage
        self.config = config
        self.provider = provider

    @property
    def _key(self) -> str:
        return self.config.storage.last_location

    def get_current_position(self) -> Coordinates:
        """Current position, else the last known position, else the configured default."""
        if self.provider is not None:
            try:
                coords = self.provider.get_position()
            except GeolocationError as e:
                logger.warning(f"Geolocation error: {e}")
            else:
                self.storage.set(self._key, coords.model_dump())
                return coords

        return self.get_last_position() or self.config.defaults.location

    def get_last_position(self, max_age_ms: Optional[int] = None) -> Optional[Coordinates]:
        """Last stored position, if any and no older than max_age_ms."""
        cached = self.storage.get(self._key, max_age_ms=max_age_ms)
        if cached is None:
            return None
        try:
            return Coordinates.model_validate(cached)
        except ValidationError:
            logger.warning("Ignoring malformed cached location")
            return None

    def get_recent_position(self, max_age_ms: Optional[int] = None) -> Optional[Coordinates]:
        """Last stored position only if it is fresh (defaults to ``location_max_age_ms``)."""
        if max_age_ms is None:
            max_age_ms = self.config.defaults.location_max_age_ms
        return self.get_last_position(max_age_ms=max_age_ms)
