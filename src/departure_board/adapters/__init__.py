"""Adapters layer - external system integrations."""

from departure_board.adapters.config import AppConfig
from departure_board.adapters.console import ConsoleView
from departure_board.adapters.geolocation import StaticGeolocationProvider
from departure_board.adapters.transport_api import (
    TransportDepartureRepository,
    TransportHttpClient,
    TransportStationRepository,
)

__all__ = [
    "AppConfig",
    "ConsoleView",
    "StaticGeolocationProvider",
    "TransportDepartureRepository",
    "TransportHttpClient",
    "TransportStationRepository",
]
