"""Stepped-motion station clock simulation.

The second hand sweeps a full turn in less than a minute, then rests at 12
until the minute impulse. The minute hand jumps forward as soon as the second
hand starts resting, so the minute seems to advance when the second hand
arrives at the top.
"""

from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from departure_board.application.schedulers import PeriodicTask
from departure_board.domain.contracts.time_source import SystemTimeSource, TimeSourceProtocol
from departure_board.domain.models.clock_hands import ClockHands
from departure_board.domain.ports.view_sink import ViewSink

logger = logging.getLogger(__name__)

ROTATION_SECONDS = 58.5
FRAME_INTERVAL_SECONDS = 1 / 60


def compute_clock_hands(now: datetime, rotation_seconds: float = ROTATION_SECONDS) -> ClockHands:
    """Compute hand angles for a wall-clock time.

    Args:
        now: Local time to show.
        rotation_seconds: Duration of one second-hand sweep.
    """
    seconds = now.second + now.microsecond / 1_000_000
    paused = seconds >= rotation_seconds

    minute = now.minute
    hour = now.hour
    if paused:
        minute += 1
        if minute >= 60:
            minute = 0
            hour += 1
        minutes = float(minute)
        second_deg = 0.0
    else:
        minutes = minute + seconds / 60
        second_deg = seconds / rotation_seconds * 360

    hours = hour % 12 + minutes / 60
    return ClockHands(
        hour_deg=hours * 30,
        minute_deg=minutes * 6,
        second_deg=second_deg,
        paused=paused,
    )


class AnalogClockSimulator:
    """Drives the analog clock per frame and the digital clock per second."""

    def __init__(
        self,
        view: ViewSink,
        time_source: TimeSourceProtocol | None = None,
        timezone: str = "Europe/Zurich",
        frame_interval_seconds: float = FRAME_INTERVAL_SECONDS,
        rotation_seconds: float = ROTATION_SECONDS,
    ) -> None:
        self._view = view
        self._time_source = time_source or SystemTimeSource()
        self._timezone = ZoneInfo(timezone)
        self._rotation_seconds = rotation_seconds
        self._frames = PeriodicTask(
            "analog-clock", frame_interval_seconds, self.render_frame, run_immediately=True
        )
        self._digital = PeriodicTask(
            "digital-clock", 1.0, self.render_digital, run_immediately=True
        )

    @property
    def running(self) -> bool:
        return self._frames.running

    def local_now(self) -> datetime:
        return self._time_source.now().astimezone(self._timezone)

    def render_frame(self) -> ClockHands:
        hands = compute_clock_hands(self.local_now(), self._rotation_seconds)
        self._view.render_clock(hands)
        return hands

    def render_digital(self) -> str:
        text = self.local_now().strftime("%H:%M:%S")
        self._view.render_digital_clock(text)
        return text

    def start(self) -> None:
        """Start both clocks. Restarting never leaves a second frame loop behind."""
        self._frames.start()
        self._digital.start()
        logger.debug("Clock started")

    def stop(self) -> None:
        self._frames.stop()
        self._digital.stop()
