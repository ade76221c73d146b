"""Pytest configuration and fixtures."""

import pytest

from shoresquad.core import ApiConfig, AppConfig
from shoresquad.storage import MemoryStore, StorageManager

START_MS = 1_700_000_000_000


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now: int = START_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config(tmp_path):
    """Config with an API key, no retry delay and storage under tmp_path."""
    return AppConfig(
        api=ApiConfig(weather_api_key="test-key", retry_delay=0),
        storage_path=tmp_path / "storage.json",
    )


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def storage(memory_store, config, clock):
    return StorageManager(memory_store, namespace_keys=config.storage.namespace(), clock=clock)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    monkeypatch.setenv("OPENWEATHER_API_KEY", "env-weather-key")
    monkeypatch.delenv("SHORESQUAD_CONFIG", raising=False)
    monkeypatch.delenv("SHORESQUAD_STORAGE_PATH", raising=False)
