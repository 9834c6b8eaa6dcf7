"""Tests for the stepped station clock."""

import asyncio
from datetime import UTC, datetime

import pytest

from departure_board.application.analog_clock import (
    AnalogClockSimulator,
    compute_clock_hands,
)
from tests.fakes import FakeTimeSource, RecordingView


def test_second_hand_is_at_half_turn_at_half_rotation() -> None:
    """Given 29.25 seconds past the minute, then the second hand points at 180 degrees."""
    hands = compute_clock_hands(datetime(2024, 1, 15, 10, 0, 29, 250000))

    assert hands.paused is False
    assert hands.second_deg == pytest.approx(180.0)


def test_second_hand_rests_and_minute_advances_during_pause() -> None:
    """Given 58.5 seconds past 00:00, then the second hand rests and the minute reads 1."""
    hands = compute_clock_hands(datetime(2024, 1, 15, 0, 0, 58, 500000))

    assert hands.paused is True
    assert hands.second_deg == 0.0
    assert hands.minute_deg == pytest.approx(6.0)


def test_minute_hand_moves_smoothly_while_sweeping() -> None:
    hands = compute_clock_hands(datetime(2024, 1, 15, 3, 15, 30))

    assert hands.minute_deg == pytest.approx(15.5 * 6)
    assert hands.hour_deg == pytest.approx((3 + 15.5 / 60) * 30)


def test_pause_at_end_of_hour_rolls_hour_forward() -> None:
    """Given 10:59:59, then the minute hand is at 12 and the hour hand at 11."""
    hands = compute_clock_hands(datetime(2024, 1, 15, 10, 59, 59))

    assert hands.paused is True
    assert hands.minute_deg == 0.0
    assert hands.hour_deg == pytest.approx(11 * 30)


def test_pause_at_midnight_wraps_hour_hand() -> None:
    hands = compute_clock_hands(datetime(2024, 1, 15, 23, 59, 59))

    assert hands.hour_deg == pytest.approx(0.0)


@pytest.mark.asyncio
async def test_simulator_renders_local_time() -> None:
    """Given a UTC wall clock, when rendering, then the digital clock shows Zurich time."""
    view = RecordingView()
    time_source = FakeTimeSource(datetime(2024, 1, 15, 9, 30, 5, tzinfo=UTC))
    simulator = AnalogClockSimulator(view, time_source=time_source, timezone="Europe/Zurich")

    assert simulator.render_digital() == "10:30:05"
    hands = simulator.render_frame()

    assert view.digital_times == ["10:30:05"]
    assert view.clock_frames == [hands]


@pytest.mark.asyncio
async def test_restart_keeps_a_single_frame_loop() -> None:
    """Given a running clock, when started again, then only one frame loop remains."""
    view = RecordingView()
    simulator = AnalogClockSimulator(
        view, time_source=FakeTimeSource(), frame_interval_seconds=60.0
    )

    simulator.start()
    simulator.start()
    await asyncio.sleep(0)

    frame_tasks = [t for t in asyncio.all_tasks() if t.get_name() == "analog-clock"]
    assert len([t for t in frame_tasks if not t.done() and not t.cancelling()]) == 1
    assert simulator.running is True

    simulator.stop()
    await asyncio.sleep(0)
    assert simulator.running is False
