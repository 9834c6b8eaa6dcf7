"""transport.opendata.ch adapters."""

from departure_board.adapters.transport_api.departure_repository import (
    TransportDepartureRepository,
)
from departure_board.adapters.transport_api.http_client import TransportHttpClient
from departure_board.adapters.transport_api.station_repository import (
    TransportStationRepository,
)

__all__ = [
    "TransportDepartureRepository",
    "TransportHttpClient",
    "TransportStationRepository",
]
