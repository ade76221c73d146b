"""Weather lookups with caching."""

from shoresquad.weather.client import WeatherService, icon_url
from shoresquad.weather.models import ForecastDay, TemperatureRange, WeatherReading

__all__ = ["WeatherService", "icon_url", "WeatherReading", "ForecastDay", "TemperatureRange"]
