"""Console view sink rendering the board as plain text."""

import logging
import sys
from typing import TextIO

from departure_board.domain.models.clock_hands import ClockHands
from departure_board.domain.models.display_token import DisplayToken, TokenKind, VehicleIcon
from departure_board.domain.models.station import Station
from departure_board.domain.ports.view_sink import ViewSink

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[H\x1b[2J"

VEHICLE_GLYPHS = {
    VehicleIcon.TRAM: "[TRAM]",
    VehicleIcon.BUS: "[BUS]",
    VehicleIcon.TRAIN: "[TRAIN]",
}


class ConsoleView(ViewSink):
    """Writes board updates to a text stream."""

    def __init__(
        self, stream: TextIO | None = None, title: str = "", clear_screen: bool = False
    ) -> None:
        """Initialize the view.

        Args:
            stream: Output stream, defaults to stdout.
            title: Heading printed above the board, usually the station name.
            clear_screen: Redraw the board in place using ANSI escapes.
        """
        self._stream = stream or sys.stdout
        self.title = title
        self._clear_screen = clear_screen
        self.busy = False
        self.board_visible = False
        self.error_message: str | None = None
        self.clock_text = ""
        self.clock_hands: ClockHands | None = None

    def _write(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()

    @staticmethod
    def format_time_cell(token: DisplayToken) -> str:
        """Text shown in the time column for a token."""
        if token.kind == TokenKind.IMMINENT and token.icon is not None:
            return VEHICLE_GLYPHS[token.icon]
        return token.text

    def format_row(self, token: DisplayToken) -> str:
        platform = f"Pl. {token.platform}" if token.platform else ""
        return (
            f"{token.line:>6}  {token.destination:<32.32}  "
            f"{platform:<8}  {self.format_time_cell(token):>7}"
        )

    def render(self, tokens: list[DisplayToken]) -> None:
        header = " ".join(part for part in (self.title, self.clock_text) if part)
        lines = [header] if header else []
        if not tokens:
            lines.append("No departures")
        else:
            lines.extend(self.format_row(token) for token in tokens)
        prefix = CLEAR_SCREEN if self._clear_screen else ""
        self._write(prefix + "\n".join(lines))

    def render_suggestions(self, stations: list[Station]) -> None:
        if not stations:
            return
        self._write("Suggestions: " + ", ".join(station.name for station in stations))

    def set_busy(self, busy: bool) -> None:
        if busy and not self.busy:
            self._write("Loading...")
        self.busy = busy

    def show_error(self, message: str) -> None:
        self.busy = False
        self.board_visible = False
        self.error_message = message
        self._write(f"Error: {message}")

    def clear_error(self) -> None:
        self.error_message = None

    def show_empty_state(self) -> None:
        self.board_visible = False
        logger.debug("Showing empty state")

    def show_board(self) -> None:
        self.board_visible = True

    def render_clock(self, hands: ClockHands) -> None:
        self.clock_hands = hands

    def render_digital_clock(self, text: str) -> None:
        self.clock_text = text
