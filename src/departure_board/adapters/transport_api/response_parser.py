"""Parser for transport.opendata.ch location and stationboard responses."""

import logging
from datetime import UTC, datetime
from typing import Any

from departure_board.domain.models.departure import Departure
from departure_board.domain.models.station import Station

logger = logging.getLogger(__name__)


class ResponseParser:
    """Parses transport.opendata.ch responses into domain objects."""

    @staticmethod
    def parse_stations(data: dict[str, Any]) -> list[Station]:
        """Parse the stations of a /locations response.

        Entries without both an id and a name are dropped; order is kept.
        """
        stations = data.get("stations") or []
        if not isinstance(stations, list):
            return []

        results = []
        for entry in stations:
            if not isinstance(entry, dict):
                continue
            station_id = str(entry.get("id") or "")
            name = str(entry.get("name") or "")
            if not station_id or not name:
                continue

            latitude, longitude = ResponseParser._parse_coordinate(entry.get("coordinate"))
            results.append(
                Station(id=station_id, name=name, latitude=latitude, longitude=longitude)
            )

        return results

    @staticmethod
    def _parse_coordinate(coordinate: Any) -> tuple[float | None, float | None]:
        """Parse a WGS84 coordinate. The API reports latitude as x and longitude as y."""
        if not isinstance(coordinate, dict):
            return None, None
        x, y = coordinate.get("x"), coordinate.get("y")
        if x is None or y is None:
            return None, None
        try:
            return float(x), float(y)
        except (TypeError, ValueError):
            return None, None

    @staticmethod
    def parse_departures(data: dict[str, Any], now: datetime) -> list[Departure]:
        """Parse the entries of a /stationboard response.

        Args:
            data: Decoded response body.
            now: Fallback departure time for entries without a usable time.

        Returns:
            Departures in server order.
        """
        entries = data.get("stationboard") or []
        if not isinstance(entries, list):
            return []

        return [
            ResponseParser._parse_departure(entry, now)
            for entry in entries
            if isinstance(entry, dict)
        ]

    @staticmethod
    def _parse_departure(entry: dict[str, Any], now: datetime) -> Departure:
        stop = entry.get("stop") or {}
        if not isinstance(stop, dict):
            stop = {}

        return Departure(
            line=str(entry.get("number") or entry.get("name") or ""),
            destination=str(entry.get("to") or ""),
            time=ResponseParser._parse_departure_time(stop, now),
            platform=str(stop.get("platform") or ""),
            category=str(entry.get("category") or ""),
        )

    @staticmethod
    def _parse_departure_time(stop: dict[str, Any], now: datetime) -> datetime:
        """Parse the stop's departure time, falling back to its epoch timestamp, then now."""
        departure = stop.get("departure")
        if departure:
            try:
                parsed = datetime.fromisoformat(str(departure).replace("Z", "+00:00"))
                if parsed.tzinfo is None:
                    parsed = parsed.replace(tzinfo=UTC)
                return parsed.astimezone(UTC)
            except ValueError:
                logger.warning(f"Unparseable departure time '{departure}'")

        timestamp = stop.get("departureTimestamp")
        if timestamp is not None:
            try:
                return datetime.fromtimestamp(int(timestamp), UTC)
            except (TypeError, ValueError, OverflowError):
                logger.warning(f"Unparseable departure timestamp '{timestamp}'")

        return now
