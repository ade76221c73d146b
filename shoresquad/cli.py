import argparse
import asyncio
import logging
import sys
from pathlib import Path

from shoresquad.app import ShoreSquadApp
from shoresquad.core import ShoreSquadError, load_config
from shoresquad.location import StaticPositionProvider
from shoresquad.weather import icon_url

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shoresquad", description="Organize beach cleanups with your crew")
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--storage", help="Path to the storage file (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    weather = sub.add_parser("weather", help="Show weather at your location")
    weather.add_argument("--lat", type=float, help="Latitude")
    weather.add_argument("--lng", type=float, help="Longitude")

    beaches = sub.add_parser("beaches", help="Cleanup beaches")
    beach_sub = beaches.add_subparsers(dest="beach_command", required=True)
    beach_sub.add_parser("list", help="List beaches")
    select = beach_sub.add_parser("select", help="Select a beach")
    select.add_argument("beach_id")
    directions = beach_sub.add_parser("directions", help="Directions to the selected beach")
    directions.add_argument("--lat", type=float, help="Starting latitude")
    directions.add_argument("--lng", type=float, help="Starting longitude")
    beach_sub.add_parser("share", help="Invitation text for the selected beach")
    map_view = beach_sub.add_parser("map", help="Map of the selected beach")
    map_view.add_argument("--view", choices=["roadmap", "satellite"], default="roadmap")

    crew = sub.add_parser("crew", help="Crew roster and cleanup log")
    crew_sub = crew.add_subparsers(dest="crew_command", required=True)
    crew_sub.add_parser("show", help="Show crew stats and members")
    add_member = crew_sub.add_parser("add-member", help="Add a crew member")
    add_member.add_argument("name")
    add_member.add_argument("--email")
    log_cleanup = crew_sub.add_parser("log-cleanup", help="Log a cleanup")
    log_cleanup.add_argument("location")
    log_cleanup.add_argument("--date", help="ISO date (defaults to now)")
    log_cleanup.add_argument("--trash", type=float, default=0, help="Trash collected")
    log_cleanup.add_argument("--duration", type=float, default=0, help="Duration in minutes")
    log_cleanup.add_argument("--participant", action="append", default=[], help="Participant name (repeatable)")

    sub.add_parser("clear", help="Remove all ShoreSquad data")
    return parser


async def _show_weather(app: ShoreSquadApp) -> None:
    try:
        location, current, forecast = await app.load_weather()
    finally:
        await app.close()

    suffix = " (offline data)" if current.mock else ""
    print(f"{current.location} @ {location.lat}, {location.lng}{suffix}")
    print(f"  {current.temperature}°C, {current.description}  {icon_url(current.icon)}")
    print(f"  Humidity {current.humidity}%  Wind {current.wind_speed} km/h")
    if current.visibility:
        print(f"  Visibility {current.visibility} km")
    print("Forecast:")
    for day in forecast:
        print(
            f"  {day.date:%a %d %b}  {day.temperature.high}°/{day.temperature.low}°  "
            f"{day.description}, wind {day.wind_speed} km/h"
        )


def _run_beaches(app: ShoreSquadApp, args: argparse.Namespace) -> None:
    if args.beach_command == "list":
        current = app.beaches.current.id
        for beach in app.beaches.beaches.values():
            marker = "*" if beach.id == current else " "
            print(f"{marker} {beach.id:<12} {beach.name} - {beach.description}")
    elif args.beach_command == "select":
        beach = app.beaches.select(args.beach_id)
        print(f"Switched to {beach.name}")
        print(f"  Coordinates: {beach.coordinates.lat}, {beach.coordinates.lng}")
        print(f"  {', '.join(beach.features)}")
    elif args.beach_command == "directions":
        # Route from the user when a position is known, else destination only
        if app.geolocation.provider is not None or app.geolocation.get_last_position() is not None:
            print(app.beaches.route_url(app.geolocation.get_current_position()))
        else:
            print(app.beaches.directions_url())
    elif args.beach_command == "share":
        print(app.beaches.share_text())
    elif args.beach_command == "map":
        print(app.beaches.map_view_url(args.view))


def _run_crew(app: ShoreSquadApp, args: argparse.Namespace) -> None:
    if args.crew_command == "show":
        crew = app.crew.get_crew()
        print(f"Cleanups: {crew.stats.total_cleanups}")
        print(f"Crew size: {crew.stats.total_members}")
        print(f"Trash collected: {crew.stats.total_trash_collected:g}")
        for member in crew.members:
            print(f"  - {member.name}" + (f" <{member.email}>" if member.email else ""))
    elif args.crew_command == "add-member":
        member = app.crew.add_member(args.name, email=args.email)
        print(f"{member.name} joined the crew!")
    elif args.crew_command == "log-cleanup":
        app.crew.add_cleanup(
            args.location,
            date=args.date,
            participants=args.participant,
            trash_collected=args.trash,
            duration=args.duration,
        )
        print("Cleanup logged successfully!")


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    if args.storage:
        config = config.model_copy(update={"storage_path": Path(args.storage).expanduser()})

    provider = None
    if getattr(args, "lat", None) is not None and getattr(args, "lng", None) is not None:
        provider = StaticPositionProvider(args.lat, args.lng)

    app = ShoreSquadApp(config, provider=provider)
    logger.debug(f"{config.name} v{config.version} using {config.storage_path}")

    if args.command == "weather":
        asyncio.run(_show_weather(app))
    elif args.command == "beaches":
        _run_beaches(app, args)
    elif args.command == "crew":
        _run_crew(app, args)
    elif args.command == "clear":
        if not app.clear():
            print("Some data could not be removed", file=sys.stderr)
            return 1
        print("ShoreSquad data cleared")
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (getattr(args, "lat", None) is None) != (getattr(args, "lng", None) is None):
        parser.error("--lat and --lng must be given together")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        code = run(args)
    except ShoreSquadError as e:
        logger.error(str(e))
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
