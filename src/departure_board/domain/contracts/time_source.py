"""Protocol for reading the current time."""

from datetime import UTC, datetime
from typing import Protocol


class TimeSourceProtocol(Protocol):
    """Protocol for a wall clock."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...


class SystemTimeSource:
    """Wall clock backed by the system time, in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)
