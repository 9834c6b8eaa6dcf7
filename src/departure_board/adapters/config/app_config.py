"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from departure_board.domain.models.board_settings import BoardSettings

# TOML section -> fields it may override
_TOML_SECTIONS: dict[str, tuple[str, ...]] = {
    "api": (
        "api_base_url",
        "api_timeout_seconds",
        "departures_limit",
        "suggestions_limit",
    ),
    "board": (
        "min_query_length",
        "search_debounce_ms",
        "refresh_interval_seconds",
        "retry_interval_seconds",
        "countdown_interval_seconds",
        "clock_rotation_seconds",
        "clock_frame_interval_seconds",
        "timezone",
    ),
    "location": (
        "latitude",
        "longitude",
        "secure_context",
        "geolocation_timeout_ms",
        "geolocation_max_age_ms",
    ),
}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Transport API configuration
    api_base_url: str = Field(
        default="https://transport.opendata.ch/v1",
        description="Base URL of the station/departure lookup service",
    )
    api_timeout_seconds: float = Field(
        default=15.0, description="Timeout for a single lookup request in seconds"
    )
    departures_limit: int = Field(
        default=8, description="Maximum number of departures to fetch per station"
    )
    suggestions_limit: int = Field(
        default=8, description="Maximum number of station suggestions to show"
    )

    # Board behaviour
    min_query_length: int = Field(
        default=2, description="Shortest query that triggers a station search"
    )
    search_debounce_ms: int = Field(
        default=250, description="Delay after the last keystroke before searching"
    )
    refresh_interval_seconds: float = Field(
        default=30.0, description="Interval between departure refreshes in seconds"
    )
    retry_interval_seconds: float = Field(
        default=30.0, description="Interval between automatic retries after a failed lookup"
    )
    countdown_interval_seconds: float = Field(
        default=1.0, description="Interval between countdown updates in seconds"
    )
    clock_rotation_seconds: float = Field(
        default=58.5,
        description="Seconds the analog clock's second hand needs for one sweep",
    )
    clock_frame_interval_seconds: float = Field(
        default=1 / 60, description="Interval between analog clock frames in seconds"
    )
    timezone: str = Field(
        default="Europe/Zurich",
        description="Timezone for the clocks (IANA timezone name, e.g., 'Europe/Zurich')",
    )

    # Geolocation
    latitude: float | None = Field(default=None, description="Static latitude of this display")
    longitude: float | None = Field(default=None, description="Static longitude of this display")
    secure_context: bool = Field(
        default=True, description="Whether geolocation may be used from this context"
    )
    geolocation_timeout_ms: int = Field(
        default=15000, description="Timeout for a position fix in milliseconds"
    )
    geolocation_max_age_ms: int = Field(
        default=60000, description="Maximum age of a cached position fix in milliseconds"
    )

    log_level: str = Field(default="INFO", description="Root log level")

    # Optional TOML file overriding the values above
    config_file: str | None = Field(
        default=None,
        description="Path to a TOML configuration file with [api], [board] and [location] sections",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name, got '{v}'") from e
        return v

    @field_validator(
        "api_timeout_seconds",
        "refresh_interval_seconds",
        "retry_interval_seconds",
        "countdown_interval_seconds",
        "clock_rotation_seconds",
        "clock_frame_interval_seconds",
    )
    @classmethod
    def validate_positive_interval(cls, v: float) -> float:
        """Validate intervals are strictly positive."""
        if v <= 0:
            raise ValueError("intervals must be greater than zero")
        return v

    @field_validator("departures_limit", "suggestions_limit", "min_query_length")
    @classmethod
    def validate_positive_count(cls, v: int) -> int:
        """Validate counts are at least one."""
        if v < 1:
            raise ValueError("limits must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Create a config that ignores .env files and TOML files."""
        overrides.setdefault("config_file", None)
        return cls(_env_file=None, **overrides)

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000

    @property
    def has_static_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def load_toml_overrides(self) -> dict[str, Any]:
        """Load the TOML file and apply its sections on top of the current values.

        Returns the parsed TOML data. Does nothing when config_file is unset.
        """
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        for section, fields in _TOML_SECTIONS.items():
            values = toml_data.get(section, {})
            if not isinstance(values, dict):
                raise ValueError(f"TOML config '{section}' must be a table")
            for name in fields:
                if name in values:
                    setattr(self, name, values[name])

        return toml_data

    def to_board_settings(self) -> BoardSettings:
        """Settings consumed by the board controller."""
        return BoardSettings(
            departures_limit=self.departures_limit,
            min_query_length=self.min_query_length,
            search_debounce_seconds=self.search_debounce_seconds,
            refresh_interval_seconds=self.refresh_interval_seconds,
            retry_interval_seconds=self.retry_interval_seconds,
            countdown_interval_seconds=self.countdown_interval_seconds,
            geolocation_timeout_ms=self.geolocation_timeout_ms,
            geolocation_max_age_ms=self.geolocation_max_age_ms,
        )
