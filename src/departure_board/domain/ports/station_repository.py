"""Station repository port."""

from typing import Protocol

from departure_board.domain.models.station import Station


class StationRepository(Protocol):
    """Port for looking up stations."""

    async def search_stations(self, query: str) -> list[Station]:
        """Search stations by name, in the service's ranking order."""
        ...

    async def find_nearest_station(self, latitude: float, longitude: float) -> Station:
        """Find the nearest station to given coordinates.

        Raises NotFound when the service reports no usable station.
        """
        ...
