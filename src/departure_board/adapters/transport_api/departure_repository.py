"""Departure repository adapter for transport.opendata.ch."""

import logging

from departure_board.adapters.transport_api.constants import (
    DEFAULT_DEPARTURES_LIMIT,
    STATIONBOARD_PATH,
)
from departure_board.adapters.transport_api.http_client import TransportHttpClient
from departure_board.adapters.transport_api.response_parser import ResponseParser
from departure_board.domain.contracts.time_source import SystemTimeSource, TimeSourceProtocol
from departure_board.domain.models.departure import Departure
from departure_board.domain.ports.departure_repository import DepartureRepository

logger = logging.getLogger(__name__)


class TransportDepartureRepository(DepartureRepository):
    """Adapter for departures using the /stationboard endpoint."""

    def __init__(
        self,
        http_client: TransportHttpClient,
        time_source: TimeSourceProtocol | None = None,
    ) -> None:
        self._http_client = http_client
        self._time_source = time_source or SystemTimeSource()

    async def get_departures(
        self, station_id: str, limit: int = DEFAULT_DEPARTURES_LIMIT
    ) -> list[Departure]:
        """Get departures for a station.

        Args:
            station_id: Station id, or a station name when no id is known.
            limit: Maximum number of departures to request.

        Returns:
            Departures in the order the API returns them.
        """
        data = await self._http_client.get_json(
            STATIONBOARD_PATH, {"station": station_id, "limit": str(limit)}
        )
        departures = ResponseParser.parse_departures(data, self._time_source.now())
        logger.debug(f"Fetched {len(departures)} departure(s) for '{station_id}'")
        return departures
