"""Departure repository port."""

from typing import Protocol

from departure_board.domain.models.departure import Departure


class DepartureRepository(Protocol):
    """Port for retrieving departure information."""

    async def get_departures(self, station_id: str, limit: int = 8) -> list[Departure]:
        """Get upcoming departures for a station id or name.

        Raises:
            LookupFailure: Classified failure, RequestCancelled when the
                implementation observed an abort of its own transport.
        """
        ...
