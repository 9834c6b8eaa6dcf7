"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """Represents a public transport station.

    The id may be empty when the station was derived from a typed name only;
    lookups then fall back to the name.
    """

    id: str
    name: str
    latitude: float | None = None
    longitude: float | None = None

    @property
    def lookup_key(self) -> str:
        """Identifier used for departure queries."""
        return self.id or self.name
