"""Display token domain model."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """How a departure's remaining time is shown."""

    IMMINENT = "imminent"
    MINUTES = "minutes"
    HOURS = "hours"
    DEPARTED = "departed"


class VehicleIcon(str, Enum):
    """Vehicle icon shown for imminent departures."""

    TRAM = "tram"
    BUS = "bus"
    TRAIN = "train"


@dataclass(frozen=True)
class DisplayToken:
    """Countdown display state for one departure, derived on every tick."""

    line: str
    destination: str
    platform: str
    kind: TokenKind
    text: str
    icon: VehicleIcon | None = None
