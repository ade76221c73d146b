"""Weather client for OpenWeatherMap with persistent caching."""

import logging
import math
import random
from datetime import UTC, datetime, timedelta
from typing import Any, Optional

import httpx
from cachetools import TTLCache
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from shoresquad.core import AppConfig, WeatherError
from shoresquad.storage import StorageManager, wall_clock_ms
from shoresquad.storage.manager import Clock
from shoresquad.weather.models import ForecastDay, TemperatureRange, WeatherReading

logger = logging.getLogger(__name__)

ICON_URL = "https://openweathermap.org/img/w/{icon}.png"
FORECAST_DAYS = 5


def _round(value: float) -> int:
    """Round half up."""
    return math.floor(value + 0.5)


def _ms_to_kmh(speed: float) -> int:
    return _round(speed * 3.6)


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, WeatherError) and error.retryable


def icon_url(icon: str) -> str:
    """URL of the OpenWeatherMap icon image."""
    return ICON_URL.format(icon=icon)


class WeatherService:
    """Current weather and forecast with caching and mock fallbacks."""

    def __init__(
        self,
        config: AppConfig,
        storage: StorageManager,
        client: Optional[httpx.AsyncClient] = None,
        clock: Clock = wall_clock_ms,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize weather service.

        Args:
            config: Application config (API settings and cache duration)
            storage: Persistent cache for current conditions
            client: HTTP client (optional, one is created from config on first request)
            clock: Epoch-millisecond clock used for reading timestamps
            rng: Random source for mock forecasts
        """
        self.config = config
        self.storage = storage
        self.clock = clock
        self._rng = rng or random.Random()
        self._owns_client = client is None
        self._client = client

        # Forecasts are only memoized for the life of the process
        ttl_seconds = config.defaults.weather_cache_duration_ms / 1000
        self._forecast_cache: TTLCache = TTLCache(maxsize=128, ttl=ttl_seconds)

    @property
    def client(self) -> httpx.AsyncClient:
        """HTTP client, created from config on first use unless one was injected."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.api.weather_base_url,
                timeout=self.config.api.timeout,
            )
        return self._client

    @staticmethod
    def cache_key(lat: float, lng: float) -> str:
        return f"weather-{lat}-{lng}"

    async def get_current_weather(self, lat: float, lng: float) -> WeatherReading:
        """Get current conditions, served from cache when fresh.

        Args:
            lat: Latitude
            lng: Longitude

        Returns:
            Weather reading; mock data if the API is unavailable
        """
        key = self.cache_key(lat, lng)
        cached = self.storage.get(key, max_age_ms=self.config.defaults.weather_cache_duration_ms)
        if cached is not None:
            try:
                return WeatherReading.model_validate(cached)
            except ValidationError:
                logger.warning(f"Discarding malformed cached weather for {key}")

        try:
            data = await self._request("/weather", lat, lng)
            reading = self.format_weather_data(data)
        except WeatherError as e:
            logger.warning(f"Weather fetch failed: {e}")
            return self.get_mock_weather_data()
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"Weather fetch failed: unexpected response: {e!r}")
            return self.get_mock_weather_data()

        self.storage.set(key, reading.model_dump(mode="json"))
        return reading

    async def get_forecast(self, lat: float, lng: float) -> list[ForecastDay]:
        """Get the next forecast entries for a location.

        Args:
            lat: Latitude
            lng: Longitude

        Returns:
            Up to five forecast entries; mock data if the API is unavailable
        """
        key = (lat, lng)
        cached = self._forecast_cache.get(key)
        if cached is not None:
            return cached

        try:
            data = await self._request("/forecast", lat, lng)
            forecast = self.format_forecast_data(data)
        except WeatherError as e:
            logger.warning(f"Forecast fetch failed: {e}")
            return self.get_mock_forecast_data()
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"Forecast fetch failed: unexpected response: {e!r}")
            return self.get_mock_forecast_data()

        self._forecast_cache[key] = forecast
        return forecast

    async def _request(self, path: str, lat: float, lng: float) -> dict[str, Any]:
        api = self.config.api
        if not api.weather_api_key:
            raise WeatherError("Weather API key not configured")

        params = {"lat": lat, "lon": lng, "appid": api.weather_api_key, "units": "metric"}
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(api.max_retries),
            wait=wait_exponential(multiplier=api.retry_delay, max=10),
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        ):
            with attempt:
                return await self._get(path, params)
        raise WeatherError("Weather request was not attempted")  # pragma: no cover

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self.client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise WeatherError(f"Weather API error: {status}", status_code=status) from e
        except httpx.HTTPError as e:
            raise WeatherError(f"Weather request failed: {e}") from e
        return response.json()

    def format_weather_data(self, data: dict[str, Any]) -> WeatherReading:
        """Convert an OpenWeatherMap ``/weather`` payload."""
        visibility = data.get("visibility")
        return WeatherReading(
            temperature=_round(data["main"]["temp"]),
            description=data["weather"][0]["description"],
            icon=data["weather"][0]["icon"],
            humidity=data["main"]["humidity"],
            wind_speed=_ms_to_kmh(data["wind"]["speed"]),
            wind_direction=data["wind"].get("deg"),
            visibility=_round(visibility / 1000) if visibility else None,
            location=data.get("name", ""),
            timestamp=self.clock(),
        )

    @staticmethod
    def format_forecast_data(data: dict[str, Any]) -> list[ForecastDay]:
        """Convert an OpenWeatherMap ``/forecast`` payload."""
        return [
            ForecastDay(
                date=datetime.fromtimestamp(item["dt"], UTC),
                temperature=TemperatureRange(
                    high=_round(item["main"]["temp_max"]),
                    low=_round(item["main"]["temp_min"]),
                ),
                description=item["weather"][0]["description"],
                icon=item["weather"][0]["icon"],
                humidity=item["main"]["humidity"],
                wind_speed=_ms_to_kmh(item["wind"]["speed"]),
            )
            for item in data["list"][:FORECAST_DAYS]
        ]

    def get_mock_weather_data(self) -> WeatherReading:
        return WeatherReading(
            temperature=22,
            description="partly cloudy",
            icon="02d",
            humidity=65,
            wind_speed=13,
            wind_direction=270,
            visibility=16,
            location="Beach Area",
            timestamp=self.clock(),
            mock=True,
        )

    def get_mock_forecast_data(self) -> list[ForecastDay]:
        today = datetime.now(UTC)
        rng = self._rng
        return [
            ForecastDay(
                date=today + timedelta(days=i),
                temperature=TemperatureRange(
                    high=_round(21 + rng.random() * 8),
                    low=_round(15 + rng.random() * 6),
                ),
                description=rng.choice(["sunny", "partly cloudy", "cloudy", "windy"]),
                icon="02d",
                humidity=_round(50 + rng.random() * 30),
                wind_speed=_round(8 + rng.random() * 16),
            )
            for i in range(FORECAST_DAYS)
        ]

    async def close(self) -> None:
        """Close HTTP client."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()

    async def __aenter__(self) -> "WeatherService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
