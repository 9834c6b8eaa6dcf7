"""Main entry point running the live departure board in a terminal."""

import argparse
import asyncio
import logging
import sys

import aiohttp

from departure_board.adapters.config import AppConfig
from departure_board.adapters.console import ConsoleView
from departure_board.adapters.geolocation import StaticGeolocationProvider
from departure_board.adapters.transport_api import (
    TransportDepartureRepository,
    TransportHttpClient,
    TransportStationRepository,
)
from departure_board.application import AnalogClockSimulator, BoardController
from departure_board.domain.ports import ViewSink

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Live departure board for a station")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--station", help="Station name to search for")
    target.add_argument(
        "--near",
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        help="Show the station nearest to these coordinates",
    )
    parser.add_argument("--config", dest="config_file", help="Path to a TOML config file")
    return parser.parse_args(argv)


def build_board(
    config: AppConfig, session: aiohttp.ClientSession, view: ViewSink
) -> tuple[BoardController, AnalogClockSimulator]:
    """Wire the controller and clock to the transport API and a view."""
    http_client = TransportHttpClient(
        session, base_url=config.api_base_url, timeout_seconds=config.api_timeout_seconds
    )
    controller = BoardController(
        view,
        TransportStationRepository(
            http_client,
            max_results=config.suggestions_limit,
            min_query_length=config.min_query_length,
        ),
        TransportDepartureRepository(http_client),
        settings=config.to_board_settings(),
        geolocation=StaticGeolocationProvider.from_config(config),
    )
    clock = AnalogClockSimulator(
        view,
        timezone=config.timezone,
        frame_interval_seconds=config.clock_frame_interval_seconds,
        rotation_seconds=config.clock_rotation_seconds,
    )
    return controller, clock


async def run_board(config: AppConfig, station_query: str | None) -> None:
    """Run the board until cancelled. Failed lookups are retried while it runs."""
    async with aiohttp.ClientSession() as session:
        view = ConsoleView(title=station_query or "", clear_screen=sys.stdout.isatty())
        controller, clock = build_board(config, session, view)

        clock.start()
        try:
            if station_query:
                controller.search(station_query)
            else:
                controller.locate()
            await asyncio.Event().wait()
        finally:
            logger.info("Shutting down...")
            clock.stop()
            await controller.shutdown()


async def main(argv: list[str] | None = None) -> None:
    """Main application entry point."""
    args = parse_args(argv)
    config = AppConfig()
    if args.config_file:
        config.config_file = args.config_file

    configure_logging(config.log_level)

    try:
        config.load_toml_overrides()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    # Coordinates given on the command line win over the config file
    if args.near:
        config.latitude, config.longitude = args.near

    if not args.station and not config.has_static_position:
        logger.error("No station given. Use --station NAME or --near LAT LON,")
        logger.error("or configure latitude and longitude in the [location] config section.")
        sys.exit(1)

    await run_board(config, args.station)


def cli_main() -> None:
    """Synchronous entry point for the board command."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    cli_main()
