"""Tests for the console view sink."""

import io

from departure_board.adapters.console import ConsoleView
from departure_board.adapters.console.console_view import CLEAR_SCREEN
from departure_board.domain.models import (
    ClockHands,
    DisplayToken,
    Station,
    TokenKind,
    VehicleIcon,
)

IMMINENT_TRAM = DisplayToken(
    line="4",
    destination="Zürich, Bahnhof Tiefenbrunnen",
    platform="",
    kind=TokenKind.IMMINENT,
    text="",
    icon=VehicleIcon.TRAM,
)
IN_SEVEN = DisplayToken(
    line="S1", destination="Luzern", platform="3", kind=TokenKind.MINUTES, text="7'"
)


def test_render_writes_header_and_rows() -> None:
    """Given tokens, when rendering, then each departure is written under the title."""
    stream = io.StringIO()
    view = ConsoleView(stream=stream, title="Zürich HB")
    view.render_digital_clock("10:00:05")

    view.render([IMMINENT_TRAM, IN_SEVEN])

    lines = stream.getvalue().splitlines()
    assert lines[0] == "Zürich HB 10:00:05"
    assert "[TRAM]" in lines[1]
    assert "Zürich, Bahnhof Tiefenbrunnen" in lines[1]
    assert lines[2].endswith("7'")
    assert "Pl. 3" in lines[2]


def test_render_empty_board() -> None:
    stream = io.StringIO()

    ConsoleView(stream=stream).render([])

    assert stream.getvalue() == "No departures\n"


def test_render_clears_screen_when_enabled() -> None:
    stream = io.StringIO()

    ConsoleView(stream=stream, clear_screen=True).render([IN_SEVEN])

    assert stream.getvalue().startswith(CLEAR_SCREEN)


def test_time_cell_uses_text_for_non_imminent_tokens() -> None:
    assert ConsoleView.format_time_cell(IN_SEVEN) == "7'"
    assert ConsoleView.format_time_cell(IMMINENT_TRAM) == "[TRAM]"


def test_suggestions_are_listed_and_empty_list_is_silent() -> None:
    stream = io.StringIO()
    view = ConsoleView(stream=stream)

    view.render_suggestions([])
    view.render_suggestions([Station(id="1", name="Bern"), Station(id="2", name="Bern, Bahnhof")])

    assert stream.getvalue() == "Suggestions: Bern, Bern, Bahnhof\n"


def test_busy_indicator_prints_once_per_loading_phase() -> None:
    """Given repeated busy signals, then the loading line is written once."""
    stream = io.StringIO()
    view = ConsoleView(stream=stream)

    view.set_busy(True)
    view.set_busy(True)
    view.set_busy(False)

    assert stream.getvalue() == "Loading...\n"
    assert view.busy is False


def test_error_hides_board_until_shown_again() -> None:
    stream = io.StringIO()
    view = ConsoleView(stream=stream)
    view.show_board()
    view.set_busy(True)

    view.show_error("No station found")

    assert view.error_message == "No station found"
    assert view.board_visible is False
    assert view.busy is False
    assert stream.getvalue().endswith("Error: No station found\n")

    view.clear_error()
    view.show_board()
    assert view.error_message is None
    assert view.board_visible is True


def test_clock_updates_are_stored() -> None:
    view = ConsoleView(stream=io.StringIO())
    hands = ClockHands(hour_deg=300.0, minute_deg=0.0, second_deg=0.0, paused=True)

    view.render_clock(hands)
    view.show_empty_state()

    assert view.clock_hands == hands
    assert view.board_visible is False
