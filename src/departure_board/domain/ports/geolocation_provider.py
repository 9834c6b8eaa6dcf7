"""Geolocation provider port."""

from typing import Protocol

from departure_board.domain.models.geo_position import GeoPosition


class GeolocationProvider(Protocol):
    """Port for the device position sensor."""

    def is_supported(self) -> bool:
        """Whether a position sensor exists at all."""
        ...

    def is_secure_context(self) -> bool:
        """Whether the sensor may be used from the current context."""
        ...

    async def current_position(self, timeout_ms: int, max_age_ms: int) -> GeoPosition:
        """Get the current position.

        Raises GeoPermissionDenied, GeoUnavailable or GeoTimeout.
        """
        ...
