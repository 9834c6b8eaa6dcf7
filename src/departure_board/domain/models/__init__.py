"""Domain models for the departure board."""

from departure_board.domain.models.board_settings import BoardSettings
from departure_board.domain.models.board_state import BoardState
from departure_board.domain.models.clock_hands import ClockHands
from departure_board.domain.models.departure import Departure
from departure_board.domain.models.display_token import DisplayToken, TokenKind, VehicleIcon
from departure_board.domain.models.error_details import ErrorDetails
from departure_board.domain.models.geo_position import GeoPosition
from departure_board.domain.models.station import Station

__all__ = [
    "BoardSettings",
    "BoardState",
    "ClockHands",
    "Departure",
    "DisplayToken",
    "ErrorDetails",
    "GeoPosition",
    "Station",
    "TokenKind",
    "VehicleIcon",
]
