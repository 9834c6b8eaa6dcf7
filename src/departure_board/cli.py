"""CLI helpers for looking up stations and departures."""

import argparse
import asyncio
import json
import sys
from datetime import UTC, datetime

import aiohttp

from departure_board.adapters.config import AppConfig
from departure_board.adapters.console import ConsoleView
from departure_board.adapters.transport_api import (
    TransportDepartureRepository,
    TransportHttpClient,
    TransportStationRepository,
)
from departure_board.application.countdown import derive_display_token
from departure_board.domain.errors import LookupFailure
from departure_board.domain.models import Station


def _station_dict(station: Station) -> dict[str, object]:
    return {
        "id": station.id,
        "name": station.name,
        "latitude": station.latitude,
        "longitude": station.longitude,
    }


def _print_stations(stations: list[Station], as_json: bool) -> None:
    if as_json:
        print(json.dumps([_station_dict(s) for s in stations], indent=2, ensure_ascii=False))
        return
    print(f"\nFound {len(stations)} station(s):\n")
    for station in stations:
        print(f"  {station.name}")
        print(f"    ID: {station.id}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Look up Swiss public transport stations and departures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for stations
  departure-board-cli search "Zürich HB"

  # Find the station closest to a coordinate
  departure-board-cli nearest 47.3769 8.5417

  # Show the next departures of a station
  departure-board-cli departures "Bern" --limit 5
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    search_parser = subparsers.add_parser("search", help="Search for stations")
    search_parser.add_argument("query", help="Station name to search for")
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    nearest_parser = subparsers.add_parser("nearest", help="Find the nearest station")
    nearest_parser.add_argument("latitude", type=float, help="Latitude (WGS84)")
    nearest_parser.add_argument("longitude", type=float, help="Longitude (WGS84)")
    nearest_parser.add_argument("--json", action="store_true", help="Output as JSON")

    departures_parser = subparsers.add_parser("departures", help="List upcoming departures")
    departures_parser.add_argument("station", help="Station ID or name")
    departures_parser.add_argument("--limit", type=int, default=None, help="Number of departures")

    return parser


async def run_command(args: argparse.Namespace, config: AppConfig) -> int:
    """Execute a parsed command and return the exit code."""
    async with aiohttp.ClientSession() as session:
        http_client = TransportHttpClient(
            session, base_url=config.api_base_url, timeout_seconds=config.api_timeout_seconds
        )

        if args.command == "search":
            stations = await TransportStationRepository(
                http_client, max_results=config.suggestions_limit
            ).search_stations(args.query)
            if not stations:
                print(f"No stations found for '{args.query}'", file=sys.stderr)
                return 1
            _print_stations(stations, args.json)

        elif args.command == "nearest":
            station = await TransportStationRepository(http_client).find_nearest_station(
                args.latitude, args.longitude
            )
            _print_stations([station], args.json)

        elif args.command == "departures":
            limit = args.limit or config.departures_limit
            departures = await TransportDepartureRepository(http_client).get_departures(
                args.station, limit
            )
            now = datetime.now(UTC)
            view = ConsoleView(title=args.station)
            view.render(
                [derive_display_token(d, now) for d in departures if d.time >= now]
            )

    return 0


async def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        exit_code = await run_command(args, AppConfig())
    except LookupFailure as e:
        print(f"Error: {e.details().reason} ({e})", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
