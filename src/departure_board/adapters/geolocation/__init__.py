"""Geolocation adapters."""

from departure_board.adapters.geolocation.static_provider import StaticGeolocationProvider

__all__ = ["StaticGeolocationProvider"]
