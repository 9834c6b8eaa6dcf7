"""View sink port."""

from abc import ABC, abstractmethod

from departure_board.domain.models.clock_hands import ClockHands
from departure_board.domain.models.display_token import DisplayToken
from departure_board.domain.models.station import Station


class ViewSink(ABC):
    """Port for showing board state to users.

    Calls are one-way; the sink never calls back into the controller.
    """

    @abstractmethod
    def render(self, tokens: list[DisplayToken]) -> None:
        """Render the board rows. An empty list means no departures."""
        ...

    @abstractmethod
    def render_suggestions(self, stations: list[Station]) -> None:
        """Show station suggestions. An empty list hides them."""
        ...

    @abstractmethod
    def set_busy(self, busy: bool) -> None:
        """Toggle the loading indicator and disable inputs."""
        ...

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Show a user-facing error, hiding the board."""
        ...

    @abstractmethod
    def clear_error(self) -> None:
        """Hide any visible error."""
        ...

    @abstractmethod
    def show_empty_state(self) -> None:
        """Show the placeholder shown when no station is selected."""
        ...

    @abstractmethod
    def show_board(self) -> None:
        """Show the board container."""
        ...

    def render_clock(self, hands: ClockHands) -> None:  # noqa: B027
        """Render analog clock hands. Sinks without a clock face ignore this."""

    def render_digital_clock(self, text: str) -> None:  # noqa: B027
        """Render the digital clock. Sinks without a clock ignore this."""
