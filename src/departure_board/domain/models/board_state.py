"""Board lifecycle state."""

from enum import Enum


class BoardState(str, Enum):
    """Lifecycle of the board for the currently selected station."""

    IDLE = "idle"
    LOADING = "loading"
    DISPLAYING = "displaying"
    ERROR = "error"
