"""Departure domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Departure:
    """Represents a single departure from a station."""

    line: str
    destination: str
    time: datetime
    platform: str = ""
    category: str = ""  # Transport mode code as reported by the service (e.g. "T", "B", "IC")
