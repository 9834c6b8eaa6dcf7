"""Analog clock hands domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClockHands:
    """Rotation of each clock hand in degrees, clockwise from 12 o'clock."""

    hour_deg: float
    minute_deg: float
    second_deg: float
    paused: bool
