"""Geolocation provider backed by a configured fixed position."""

import logging

from departure_board.adapters.config.app_config import AppConfig
from departure_board.domain.errors import GeoUnavailable
from departure_board.domain.models.geo_position import GeoPosition
from departure_board.domain.ports.geolocation_provider import GeolocationProvider

logger = logging.getLogger(__name__)


class StaticGeolocationProvider(GeolocationProvider):
    """Reports a fixed position, e.g. for a wall-mounted display."""

    def __init__(
        self,
        latitude: float | None,
        longitude: float | None,
        secure_context: bool = True,
    ) -> None:
        self._latitude = latitude
        self._longitude = longitude
        self._secure_context = secure_context

    @classmethod
    def from_config(cls, config: AppConfig) -> "StaticGeolocationProvider":
        return cls(config.latitude, config.longitude, secure_context=config.secure_context)

    def is_supported(self) -> bool:
        return True

    def is_secure_context(self) -> bool:
        return self._secure_context

    async def current_position(self, timeout_ms: int, max_age_ms: int) -> GeoPosition:
        """Return the configured position.

        Raises:
            GeoUnavailable: No position is configured.
        """
        _ = timeout_ms, max_age_ms  # A fixed position is always fresh
        if self._latitude is None or self._longitude is None:
            raise GeoUnavailable("No position configured")
        logger.debug(f"Using configured position {self._latitude}, {self._longitude}")
        return GeoPosition(latitude=self._latitude, longitude=self._longitude)
