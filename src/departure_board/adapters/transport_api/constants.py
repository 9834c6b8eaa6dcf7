"""Constants for the transport.opendata.ch adapter.

API Documentation: https://transport.opendata.ch/docs.html
No authentication required.
"""

TRANSPORT_BASE_URL = "https://transport.opendata.ch/v1"
LOCATIONS_PATH = "/locations"  # GET /locations?query=...&type=station, GET /locations?x=..&y=..
STATIONBOARD_PATH = "/stationboard"  # GET /stationboard?station=...&limit=...

DEFAULT_HEADERS = {
    "Accept": "application/json",
}

DEFAULT_TIMEOUT_SECONDS = 15.0
MIN_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 8
DEFAULT_DEPARTURES_LIMIT = 8

# Characters of an error response body kept for diagnostics
BODY_PREVIEW_LENGTH = 200
