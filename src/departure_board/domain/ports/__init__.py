"""Ports (interfaces) for the ports-and-adapters architecture."""

from departure_board.domain.ports.departure_repository import DepartureRepository
from departure_board.domain.ports.geolocation_provider import GeolocationProvider
from departure_board.domain.ports.station_repository import StationRepository
from departure_board.domain.ports.view_sink import ViewSink

__all__ = [
    "DepartureRepository",
    "GeolocationProvider",
    "StationRepository",
    "ViewSink",
]
