"""Domain layer - core models, failures and ports."""

from departure_board.domain.models import (
    BoardState,
    Departure,
    DisplayToken,
    Station,
)
from departure_board.domain.ports import (
    DepartureRepository,
    GeolocationProvider,
    StationRepository,
    ViewSink,
)

__all__ = [
    "BoardState",
    "Departure",
    "DepartureRepository",
    "DisplayToken",
    "GeolocationProvider",
    "Station",
    "StationRepository",
    "ViewSink",
]
