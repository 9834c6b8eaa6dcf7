"""Geographic position domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPosition:
    """A WGS84 coordinate reported by the geolocation sensor."""

    latitude: float
    longitude: float
