"""Console adapters for displaying departures."""

from departure_board.adapters.console.console_view import ConsoleView

__all__ = ["ConsoleView"]
