"""Failure taxonomy for remote lookups and geolocation."""

from departure_board.domain.models.error_details import ErrorDetails


class LookupFailure(Exception):
    """Base class for every classified lookup failure."""

    reason = "Lookup failed"

    def details(self) -> ErrorDetails:
        """Describe the failure for logging."""
        return ErrorDetails(reason=str(self) or self.reason)


class RequestCancelled(LookupFailure):
    """The request was superseded or explicitly cancelled by the caller.

    Built-in adapters let asyncio.CancelledError propagate. Repository
    implementations wrapping a transport with its own abort signal may raise
    this instead; the request coordinator drops both silently.
    """

    reason = "Cancelled"


class LookupTimeout(LookupFailure):
    """The request did not complete within its timeout."""

    reason = "Timeout"


class NetworkError(LookupFailure):
    """The transport failed before a usable response arrived."""

    reason = "Network error"


class HttpError(LookupFailure):
    """The service answered with a non-success status code."""

    reason = "HTTP error"

    def __init__(self, status: int, body_preview: str = "") -> None:
        super().__init__(f"HTTP {status}")
        self.status = status
        self.body_preview = body_preview

    def details(self) -> ErrorDetails:
        return ErrorDetails(
            status_code=self.status,
            reason=f"HTTP {self.status}",
            body_preview=self.body_preview or None,
        )


class NotFound(LookupFailure):
    """No station matched the query or coordinates."""

    reason = "Not found"


class GeoFailure(LookupFailure):
    """Base class for geolocation sensor failures."""

    reason = "Location unavailable"
    code: int | None = None

    @staticmethod
    def from_code(code: int, message: str = "") -> "GeoFailure":
        """Map a device-level geolocation error code to its failure class."""
        if code == GeoPermissionDenied.code:
            return GeoPermissionDenied(message)
        if code == GeoTimeout.code:
            return GeoTimeout(message)
        return GeoUnavailable(message)


class GeoPermissionDenied(GeoFailure):
    reason = "Location permission denied"
    code = 1


class GeoUnavailable(GeoFailure):
    reason = "Location unavailable"
    code = 2


class GeoTimeout(GeoFailure):
    reason = "Location timeout"
    code = 3


class InsecureContext(GeoFailure):
    """Geolocation needs a trusted transport context."""

    reason = "Location requires a secure context"
