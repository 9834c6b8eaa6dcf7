"""Derivation of countdown display tokens from departure times."""

import math
from datetime import datetime, timedelta

from departure_board.domain.models.departure import Departure
from departure_board.domain.models.display_token import DisplayToken, TokenKind, VehicleIcon

TRAM_CATEGORIES = frozenset({"T", "TRAM", "NFT"})
BUS_CATEGORIES = frozenset({"B", "BUS", "NFB", "NFO", "KB", "TROLLEY"})
TRAIN_CATEGORIES = frozenset({"S", "IC", "ICE", "EC", "IR", "RE", "R"})

# Departures this close, in whole minutes, show a vehicle icon
IMMINENT_MINUTES = 1


def vehicle_icon_for(category: str) -> VehicleIcon:
    """Pick the vehicle icon for a service category code. Unknown codes get a tram."""
    code = (category or "").upper()
    if code in BUS_CATEGORIES:
        return VehicleIcon.BUS
    if code in TRAIN_CATEGORIES:
        return VehicleIcon.TRAIN
    return VehicleIcon.TRAM


def minutes_until(departure_time: datetime, now: datetime) -> int:
    """Whole minutes until departure, floored (negative once departed)."""
    return math.floor((departure_time - now) / timedelta(minutes=1))


def format_countdown(diff_mins: int) -> tuple[TokenKind, str]:
    if diff_mins < 0:
        return TokenKind.DEPARTED, "--"
    if diff_mins <= IMMINENT_MINUTES:
        return TokenKind.IMMINENT, ""
    if diff_mins < 60:
        return TokenKind.MINUTES, f"{diff_mins}'"
    hours, minutes = divmod(diff_mins, 60)
    return TokenKind.HOURS, f"{hours}:{minutes:02d}"


def derive_display_token(departure: Departure, now: datetime) -> DisplayToken:
    """Derive how a departure is shown at the given time."""
    kind, text = format_countdown(minutes_until(departure.time, now))
    return DisplayToken(
        line=departure.line,
        destination=departure.destination,
        platform=departure.platform,
        kind=kind,
        text=text,
        icon=vehicle_icon_for(departure.category) if kind == TokenKind.IMMINENT else None,
    )
