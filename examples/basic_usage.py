"""Basic usage examples."""

import asyncio
import os
import tempfile
from pathlib import Path

from shoresquad import (
    AppConfig,
    FileStore,
    ShoreSquadApp,
    StaticPositionProvider,
    StorageManager,
)
from shoresquad.core import ApiConfig


def example_expiring_cache() -> None:
    """Example: readers choose how stale a value may be."""
    print("\n=== Expiring Cache ===\n")

    path = Path(tempfile.mkdtemp()) / "storage.json"
    storage = StorageManager(FileStore(path), namespace_keys=["demo-location"])

    storage.set("demo-location", {"lat": 1.3010, "lng": 103.9124})
    print(f"Any age:     {storage.get('demo-location')}")
    print(f"Max 10 min:  {storage.get('demo-location', max_age_ms=10 * 60 * 1000)}")
    print(f"Lookup:      {storage.lookup('demo-location').status.value}")

    storage.clear()
    print(f"After clear: {storage.get('demo-location')}")


async def example_weather() -> None:
    """Example: weather at a fixed position, cached for 10 minutes."""
    print("\n=== Weather ===\n")

    config = AppConfig(
        api=ApiConfig(weather_api_key=os.getenv("OPENWEATHER_API_KEY")),
        storage_path=Path(tempfile.mkdtemp()) / "storage.json",
    )
    app = ShoreSquadApp(config, provider=StaticPositionProvider(1.381497, 103.955574))

    try:
        location, current, forecast = await app.load_weather()
    finally:
        await app.close()

    print(f"{current.location} ({location.lat}, {location.lng})")
    print(f"{current.temperature}°C, {current.description}, wind {current.wind_speed} km/h")
    print(f"Mock data: {current.mock}")
    for day in forecast:
        print(f"  {day.date:%a}: {day.temperature.high}°/{day.temperature.low}°")


def example_crew() -> None:
    """Example: crew roster and cleanup log."""
    print("\n=== Crew ===\n")

    config = AppConfig(storage_path=Path(tempfile.mkdtemp()) / "storage.json")
    app = ShoreSquadApp(config)

    app.crew.add_member("Ana", email="ana@example.com")
    app.crew.add_member("Ben")
    beach = app.beaches.select("east-coast")
    app.crew.add_cleanup(beach.name, participants=["Ana", "Ben"], trash_collected=8.5, duration=90)

    stats = app.crew.get_stats()
    print(f"Members: {stats.total_members}")
    print(f"Cleanups: {stats.total_cleanups}")
    print(f"Trash collected: {stats.total_trash_collected}")
    print(app.beaches.share_text())


if __name__ == "__main__":
    example_expiring_cache()
    asyncio.run(example_weather())
    example_crew()
