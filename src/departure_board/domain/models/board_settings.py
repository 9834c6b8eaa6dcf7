"""Board timing and lookup settings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoardSettings:
    """Settings the board controller needs, independent of where they come from."""

    departures_limit: int = 8
    min_query_length: int = 2
    search_debounce_seconds: float = 0.25
    refresh_interval_seconds: float = 30.0
    countdown_interval_seconds: float = 1.0
    geolocation_timeout_ms: int = 15000
    geolocation_max_age_ms: int = 60000
    # Seconds between automatic retries while the board shows an error, None disables
    retry_interval_seconds: float | None = None
