"""Weather data models."""

from datetime import datetime

from pydantic import BaseModel


class WeatherReading(BaseModel):
    """Current conditions at a location."""

    temperature: int  # °C
    description: str
    icon: str
    humidity: int
    wind_speed: int  # km/h
    wind_direction: int | None = None
    visibility: int | None = None  # km
    location: str
    timestamp: int  # epoch ms
    mock: bool = False


class TemperatureRange(BaseModel):
    high: int
    low: int


class ForecastDay(BaseModel):
    """One forecast entry."""

    date: datetime
    temperature: TemperatureRange
    description: str
    icon: str
    humidity: int
    wind_speed: int
