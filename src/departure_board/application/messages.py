"""User-facing messages for lookup failures."""

from departure_board.domain.errors import (
    GeoFailure,
    GeoPermissionDenied,
    GeoTimeout,
    HttpError,
    InsecureContext,
    LookupFailure,
    LookupTimeout,
    NotFound,
)

NO_STATION_FOUND = "No station found"
LOCATION_NOT_SUPPORTED = "Location is not supported"
LOCATION_UNAVAILABLE = "Location unavailable"


def failure_message(error: LookupFailure) -> str:
    """Message shown when an explicit search or load fails."""
    if isinstance(error, NotFound):
        return NO_STATION_FOUND
    if isinstance(error, HttpError):
        return f"Error loading data ({error.status})"
    if isinstance(error, LookupTimeout):
        return "The request timed out"
    if isinstance(error, GeoFailure):
        return location_failure_message(error)
    return "Could not reach the timetable service"


def location_failure_message(error: LookupFailure) -> str:
    """Message shown when locating the nearest station fails."""
    if not isinstance(error, GeoFailure):
        return failure_message(error)
    if isinstance(error, GeoPermissionDenied):
        return "Location access denied"
    if isinstance(error, GeoTimeout):
        return "Location request timed out"
    if isinstance(error, InsecureContext):
        return "Location is only available over HTTPS"
    return LOCATION_UNAVAILABLE
