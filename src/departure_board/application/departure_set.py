"""The departures shown for the currently selected station."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime

from departure_board.domain.models.departure import Departure
from departure_board.domain.models.station import Station

logger = logging.getLogger(__name__)


class DepartureSet:
    """Ordered future departures of one station.

    Every member departs at or after the time of the last replace, update or
    prune. Expired members are dropped and never come back.
    """

    def __init__(self) -> None:
        self.station: Station | None = None
        self._departures: list[Departure] = []

    def __len__(self) -> int:
        return len(self._departures)

    def __iter__(self) -> Iterator[Departure]:
        return iter(self._departures)

    @property
    def departures(self) -> tuple[Departure, ...]:
        return tuple(self._departures)

    @property
    def is_empty(self) -> bool:
        return not self._departures

    def replace(self, station: Station, departures: list[Departure], now: datetime) -> None:
        """Replace the set with a freshly loaded station board."""
        self.station = station
        self._departures = [d for d in departures if d.time >= now]
        logger.debug(
            f"Loaded {len(self._departures)} of {len(departures)} departure(s) for {station.name}"
        )

    def update(self, departures: list[Departure], now: datetime) -> None:
        """Swap in refreshed departures for the current station."""
        self._departures = [d for d in departures if d.time >= now]

    def prune(self, now: datetime) -> int:
        """Drop departures that left before now.

        Returns:
            Number of departures removed.
        """
        before = len(self._departures)
        self._departures = [d for d in self._departures if d.time >= now]
        return before - len(self._departures)

    def clear(self) -> None:
        self.station = None
        self._departures = []
