"""Tests for DepartureSet."""

from datetime import timedelta

from departure_board.application.departure_set import DepartureSet
from departure_board.domain.models import Station
from tests.fakes import BASE_TIME, make_departure

STATION = Station(id="8503000", name="Zürich HB")


def test_replace_keeps_only_future_departures() -> None:
    """Given a board with a past entry, when replacing, then only future departures remain."""
    departures = [make_departure(-2), make_departure(0), make_departure(5)]
    departure_set = DepartureSet()

    departure_set.replace(STATION, departures, BASE_TIME)

    assert departure_set.station == STATION
    assert len(departure_set) == 2
    assert departure_set.departures == (departures[1], departures[2])


def test_prune_removes_expired_and_reports_count() -> None:
    """Given two departures, when time passes the first, then prune removes exactly one."""
    departure_set = DepartureSet()
    departure_set.replace(STATION, [make_departure(1), make_departure(10)], BASE_TIME)

    removed = departure_set.prune(BASE_TIME + timedelta(minutes=2))

    assert removed == 1
    assert [d.time for d in departure_set] == [BASE_TIME + timedelta(minutes=10)]


def test_prune_keeps_departure_leaving_exactly_now() -> None:
    """Given a departure at exactly now, then it is kept."""
    departure_set = DepartureSet()
    departure_set.replace(STATION, [make_departure(3)], BASE_TIME)

    assert departure_set.prune(BASE_TIME + timedelta(minutes=3)) == 0
    assert len(departure_set) == 1


def test_update_keeps_station_and_swaps_departures() -> None:
    """Given a loaded set, when updating, then the station stays and departures are replaced."""
    departure_set = DepartureSet()
    departure_set.replace(STATION, [make_departure(1)], BASE_TIME)

    departure_set.update([make_departure(4, line="11"), make_departure(-1)], BASE_TIME)

    assert departure_set.station == STATION
    assert [d.line for d in departure_set] == ["11"]


def test_clear_empties_the_set() -> None:
    departure_set = DepartureSet()
    departure_set.replace(STATION, [make_departure(1)], BASE_TIME)

    departure_set.clear()

    assert departure_set.is_empty
    assert departure_set.station is None
