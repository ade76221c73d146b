"""User location services."""

from shoresquad.location.geolocation import (
    GeolocationService,
    PositionProvider,
    StaticPositionProvider,
)

__all__ = ["GeolocationService", "PositionProvider", "StaticPositionProvider"]
