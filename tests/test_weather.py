"""Tests for the weather service."""

import random
from datetime import UTC, datetime

import httpx
import pytest

from shoresquad.weather import ForecastDay, WeatherReading, WeatherService, icon_url

LAT, LNG = 1.381497, 103.955574

WEATHER_PAYLOAD = {
    "name": "Pasir Ris",
    "main": {"temp": 29.5, "humidity": 78},
    "weather": [{"description": "scattered clouds", "icon": "03d"}],
    "wind": {"speed": 4.1, "deg": 160},
    "visibility": 9500,
}

FORECAST_PAYLOAD = {
    "list": [
        {
            "dt": 1_700_000_000 + i * 10_800,
            "main": {"temp_max": 30.4, "temp_min": 25.5, "humidity": 70 + i},
            "weather": [{"description": "light rain", "icon": "10d"}],
            "wind": {"speed": 2.5},
        }
        for i in range(8)
    ]
}


def _response(status_code: int, path: str = "/weather", json=None) -> httpx.Response:
    request = httpx.Request("GET", f"https://api.openweathermap.org/data/2.5{path}")
    return httpx.Response(status_code, json=json, request=request)


@pytest.fixture
def service(config, storage, clock):
    return WeatherService(config, storage, clock=clock, rng=random.Random(7))


def test_cache_key():
    """Test cache keys are derived from coordinates."""
    assert WeatherService.cache_key(1.3, 103.9) == "weather-1.3-103.9"


def test_icon_url():
    """Test icon URL building."""
    assert icon_url("02d") == "https://openweathermap.org/img/w/02d.png"


def test_format_weather_data(service, clock):
    """Test OpenWeatherMap payload conversion."""
    reading = service.format_weather_data(WEATHER_PAYLOAD)

    assert reading.temperature == 30  # half rounds up
    assert reading.description == "scattered clouds"
    assert reading.icon == "03d"
    assert reading.humidity == 78
    assert reading.wind_speed == 15  # 4.1 m/s = 14.76 km/h
    assert reading.wind_direction == 160
    assert reading.visibility == 10  # 9.5 km
    assert reading.location == "Pasir Ris"
    assert reading.timestamp == clock.now
    assert reading.mock is False


def test_format_weather_data_without_visibility(service):
    """Test a missing visibility is reported as None."""
    payload = {**WEATHER_PAYLOAD}
    del payload["visibility"]

    assert service.format_weather_data(payload).visibility is None


def test_format_forecast_keeps_five_entries():
    """Test forecast conversion keeps the first five entries."""
    forecast = WeatherService.format_forecast_data(FORECAST_PAYLOAD)

    assert len(forecast) == 5
    first = forecast[0]
    assert first.date == datetime.fromtimestamp(1_700_000_000, UTC)
    assert first.temperature.high == 30
    assert first.temperature.low == 26
    assert first.wind_speed == 9
    assert forecast[4].humidity == 74


def test_mock_weather_data(service):
    """Test mock weather values."""
    reading = service.get_mock_weather_data()

    assert reading.temperature == 22
    assert reading.description == "partly cloudy"
    assert reading.wind_speed == 13
    assert reading.visibility == 16
    assert reading.location == "Beach Area"
    assert reading.mock is True


def test_mock_forecast_ranges(service):
    """Test mock forecast values stay in range."""
    forecast = service.get_mock_forecast_data()

    assert len(forecast) == 5
    for day in forecast:
        assert 21 <= day.temperature.high <= 29
        assert 15 <= day.temperature.low <= 21
        assert 8 <= day.wind_speed <= 24
        assert day.description in {"sunny", "partly cloudy", "cloudy", "windy"}


@pytest.mark.asyncio
async def test_get_current_weather_sends_expected_request(config, storage, clock):
    """Test the request path and query parameters."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=WEATHER_PAYLOAD)

    client = httpx.AsyncClient(
        base_url=config.api.weather_base_url, transport=httpx.MockTransport(handler)
    )
    async with WeatherService(config, storage, client=client, clock=clock) as service:
        reading = await service.get_current_weather(LAT, LNG)

    assert reading.location == "Pasir Ris"
    assert len(seen) == 1
    assert seen[0].url.path == "/data/2.5/weather"
    params = seen[0].url.params
    assert params["lat"] == str(LAT)
    assert params["lon"] == str(LNG)
    assert params["appid"] == "test-key"
    assert params["units"] == "metric"
    # Injected clients belong to the caller
    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_get_current_weather_uses_cache(service, mocker):
    """Test a second call within the cache window does not hit the API."""
    mock_get = mocker.patch.object(service.client, "get", return_value=_response(200, json=WEATHER_PAYLOAD))

    first = await service.get_current_weather(LAT, LNG)
    second = await service.get_current_weather(LAT, LNG)

    assert mock_get.call_count == 1
    assert second == first
    assert service.storage.get(service.cache_key(LAT, LNG))["location"] == "Pasir Ris"


@pytest.mark.asyncio
async def test_get_current_weather_refetches_after_expiry(service, clock, mocker):
    """Test an entry older than the cache duration is fetched again."""
    mock_get = mocker.patch.object(service.client, "get", return_value=_response(200, json=WEATHER_PAYLOAD))

    await service.get_current_weather(LAT, LNG)
    clock.advance(service.config.defaults.weather_cache_duration_ms + 1)
    await service.get_current_weather(LAT, LNG)

    assert mock_get.call_count == 2


@pytest.mark.asyncio
async def test_get_current_weather_falls_back_to_mock(service, mocker):
    """Test a client error yields mock data and nothing is cached."""
    mock_get = mocker.patch.object(service.client, "get", return_value=_response(401))

    reading = await service.get_current_weather(LAT, LNG)

    assert reading.mock is True
    assert mock_get.call_count == 1  # 4xx is not retried
    assert service.storage.get(service.cache_key(LAT, LNG)) is None


@pytest.mark.asyncio
async def test_get_current_weather_retries_transient_errors(service, mocker):
    """Test 5xx responses are retried before succeeding."""
    mock_get = mocker.patch.object(
        service.client,
        "get",
        side_effect=[_response(503), _response(200, json=WEATHER_PAYLOAD)],
    )

    reading = await service.get_current_weather(LAT, LNG)

    assert reading.mock is False
    assert mock_get.call_count == 2


@pytest.mark.asyncio
async def test_get_current_weather_gives_up_after_max_retries(service, mocker):
    """Test repeated timeouts exhaust retries and fall back."""
    mock_get = mocker.patch.object(service.client, "get", side_effect=httpx.ReadTimeout("slow"))

    reading = await service.get_current_weather(LAT, LNG)

    assert reading.mock is True
    assert mock_get.call_count == service.config.api.max_retries


@pytest.mark.asyncio
async def test_get_current_weather_without_api_key(config, storage, clock, mocker):
    """Test a missing API key skips the request."""
    config.api.weather_api_key = None
    service = WeatherService(config, storage, clock=clock)
    mock_get = mocker.patch.object(service.client, "get")

    reading = await service.get_current_weather(LAT, LNG)

    assert reading.mock is True
    mock_get.assert_not_called()
    await service.close()


@pytest.mark.asyncio
async def test_get_current_weather_unexpected_payload(service, mocker):
    """Test a malformed payload falls back to mock data."""
    mocker.patch.object(service.client, "get", return_value=_response(200, json={"cod": 200}))

    reading = await service.get_current_weather(LAT, LNG)

    assert reading.mock is True


@pytest.mark.asyncio
async def test_get_current_weather_ignores_malformed_cache(service, mocker):
    """Test a cached value that is not a reading is refetched."""
    service.storage.set(service.cache_key(LAT, LNG), {"temperature": "hot"})
    mock_get = mocker.patch.object(service.client, "get", return_value=_response(200, json=WEATHER_PAYLOAD))

    reading = await service.get_current_weather(LAT, LNG)

    assert reading.location == "Pasir Ris"
    assert mock_get.call_count == 1


@pytest.mark.asyncio
async def test_get_forecast_is_memoized(service, mocker):
    """Test forecasts are fetched once per location."""
    mock_get = mocker.patch.object(
        service.client, "get", return_value=_response(200, "/forecast", json=FORECAST_PAYLOAD)
    )

    first = await service.get_forecast(LAT, LNG)
    second = await service.get_forecast(LAT, LNG)

    assert len(first) == 5
    assert all(isinstance(day, ForecastDay) for day in first)
    assert second is first
    assert mock_get.call_count == 1
    assert mock_get.call_args.args[0] == "/forecast"


@pytest.mark.asyncio
async def test_get_forecast_falls_back_to_mock(service, mocker):
    """Test forecast failures produce mock data."""
    mocker.patch.object(service.client, "get", return_value=_response(404, "/forecast"))

    forecast = await service.get_forecast(LAT, LNG)

    assert len(forecast) == 5


@pytest.mark.asyncio
async def test_close_owned_client(service):
    """Test closing the service closes the client it created."""
    client = service.client

    await service.close()

    assert client.is_closed
    assert service.client is client


@pytest.mark.asyncio
async def test_client_created_on_first_use(service):
    """Test no HTTP client exists until a request needs one."""
    assert service._client is None

    await service.close()

    assert service._client is None
    assert service.client is service.client
    await service.close()


def test_weather_reading_round_trips_through_storage(storage, service):
    """Test a reading stored as JSON validates back to the same model."""
    reading = service.get_mock_weather_data()
    storage.set("reading", reading.model_dump(mode="json"))

    assert WeatherReading.model_validate(storage.get("reading")) == reading
