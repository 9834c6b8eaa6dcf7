"""Station repository adapter for transport.opendata.ch."""

import logging

from departure_board.adapters.transport_api.constants import (
    LOCATIONS_PATH,
    MAX_SUGGESTIONS,
    MIN_QUERY_LENGTH,
)
from departure_board.adapters.transport_api.http_client import TransportHttpClient
from departure_board.adapters.transport_api.response_parser import ResponseParser
from departure_board.domain.errors import NotFound
from departure_board.domain.models.station import Station
from departure_board.domain.ports.station_repository import StationRepository

logger = logging.getLogger(__name__)


class TransportStationRepository(StationRepository):
    """Adapter for station lookups using the /locations endpoint."""

    def __init__(
        self,
        http_client: TransportHttpClient,
        max_results: int = MAX_SUGGESTIONS,
        min_query_length: int = MIN_QUERY_LENGTH,
    ) -> None:
        """Initialize with an HTTP client.

        Args:
            http_client: Client used for API calls.
            max_results: Maximum number of stations returned by a search.
            min_query_length: Shorter queries return no results without a request.
        """
        self._http_client = http_client
        self._max_results = max_results
        self._min_query_length = min_query_length

    async def search_stations(self, query: str) -> list[Station]:
        """Search stations by name.

        Args:
            query: Station name or prefix.

        Returns:
            Up to max_results stations in the order the API ranks them.
        """
        query = query.strip()
        if len(query) < self._min_query_length:
            return []

        data = await self._http_client.get_json(
            LOCATIONS_PATH, {"query": query, "type": "station"}
        )
        stations = ResponseParser.parse_stations(data)[: self._max_results]
        logger.debug(f"Search '{query}' returned {len(stations)} station(s)")
        return stations

    async def find_nearest_station(self, latitude: float, longitude: float) -> Station:
        """Find the nearest station to given coordinates.

        Args:
            latitude: Latitude coordinate.
            longitude: Longitude coordinate.

        Returns:
            The closest station reported by the API.

        Raises:
            NotFound: The API reported no station with an id and a name.
        """
        data = await self._http_client.get_json(
            LOCATIONS_PATH, {"x": str(latitude), "y": str(longitude)}
        )
        stations = ResponseParser.parse_stations(data)
        if not stations:
            raise NotFound(f"No station found near {latitude:.5f}, {longitude:.5f}")

        logger.info(f"Nearest station to {latitude:.5f}, {longitude:.5f}: {stations[0].name}")
        return stations[0]
