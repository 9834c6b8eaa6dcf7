"""Application services (use cases) for the departure board."""

from departure_board.application.analog_clock import AnalogClockSimulator, compute_clock_hands
from departure_board.application.board_controller import BoardController
from departure_board.application.countdown import derive_display_token, vehicle_icon_for
from departure_board.application.departure_set import DepartureSet
from departure_board.application.request_coordinator import (
    Channel,
    RequestCoordinator,
    RequestOutcome,
)
from departure_board.application.schedulers import Debouncer, PeriodicTask

__all__ = [
    "AnalogClockSimulator",
    "BoardController",
    "Channel",
    "Debouncer",
    "DepartureSet",
    "PeriodicTask",
    "RequestCoordinator",
    "RequestOutcome",
    "compute_clock_hands",
    "derive_display_token",
    "vehicle_icon_for",
]
