"""Board controller: the single owner of board state.

User actions only initiate requests on the coordinator. The station board and
the departure set change exclusively inside completion handlers that the
coordinator runs for the latest request of a channel.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from departure_board.application.countdown import derive_display_token
from departure_board.application.departure_set import DepartureSet
from departure_board.application.messages import (
    LOCATION_NOT_SUPPORTED,
    NO_STATION_FOUND,
    failure_message,
    location_failure_message,
)
from departure_board.application.request_coordinator import (
    Channel,
    RequestCoordinator,
    RequestOutcome,
)
from departure_board.application.schedulers import Debouncer, PeriodicTask
from departure_board.domain.contracts.time_source import SystemTimeSource, TimeSourceProtocol
from departure_board.domain.errors import InsecureContext, LookupFailure
from departure_board.domain.models.board_settings import BoardSettings
from departure_board.domain.models.board_state import BoardState
from departure_board.domain.models.departure import Departure
from departure_board.domain.models.display_token import DisplayToken
from departure_board.domain.models.station import Station
from departure_board.domain.ports import (
    DepartureRepository,
    GeolocationProvider,
    StationRepository,
    ViewSink,
)

logger = logging.getLogger(__name__)

RequestTask = asyncio.Task[RequestOutcome]


class BoardController:
    """Coordinates searches, loads, refreshes and the countdown for one board."""

    def __init__(
        self,
        view: ViewSink,
        station_repository: StationRepository,
        departure_repository: DepartureRepository,
        settings: BoardSettings | None = None,
        geolocation: GeolocationProvider | None = None,
        time_source: TimeSourceProtocol | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            view: Sink receiving everything shown to the user.
            station_repository: Station search and nearest-station lookups.
            departure_repository: Departure lookups.
            settings: Timing and limits, defaults if omitted.
            geolocation: Position sensor, or None where locating is unsupported.
            time_source: Wall clock, the system clock if omitted.
        """
        self.settings = settings or BoardSettings()
        self._view = view
        self._stations = station_repository
        self._departures = departure_repository
        self._geolocation = geolocation
        self._time_source = time_source or SystemTimeSource()

        self.coordinator = RequestCoordinator()
        self._departure_set = DepartureSet()
        self._state = BoardState.IDLE
        self._selected_station: Station | None = None
        self._last_query = ""
        self._locating = False
        self._refresh_failures = 0

        self._debouncer = Debouncer(self.settings.search_debounce_seconds)
        self._countdown = PeriodicTask(
            "countdown", self.settings.countdown_interval_seconds, self.tick
        )
        self._refresh_ticker = PeriodicTask(
            "refresh", self.settings.refresh_interval_seconds, self._on_refresh_tick
        )
        self._retry_ticker: PeriodicTask | None = None
        if self.settings.retry_interval_seconds is not None:
            self._retry_ticker = PeriodicTask(
                "retry", self.settings.retry_interval_seconds, self._on_retry_tick
            )

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def selected_station(self) -> Station | None:
        return self._selected_station

    @property
    def station(self) -> Station | None:
        """Station whose departures are currently on the board."""
        return self._departure_set.station

    @property
    def departures(self) -> tuple[Departure, ...]:
        return self._departure_set.departures

    @property
    def refresh_failures(self) -> int:
        """Consecutive refresh failures since the last successful fetch."""
        return self._refresh_failures

    @property
    def countdown_running(self) -> bool:
        return self._countdown.running

    @property
    def refresh_running(self) -> bool:
        return self._refresh_ticker.running

    @property
    def retry_running(self) -> bool:
        return self._retry_ticker is not None and self._retry_ticker.running

    # Suggestions

    def on_query_changed(self, query: str) -> None:
        """Handle a keystroke in the station input.

        The search runs once the input stayed unchanged for the debounce delay.
        """
        query = query.strip()
        self._last_query = query
        self._debouncer.cancel()
        self.coordinator.invalidate(Channel.SUGGESTIONS)

        if len(query) < self.settings.min_query_length:
            self._view.render_suggestions([])
            return

        self._debouncer.call(self._issue_suggestion_search, query)

    def _issue_suggestion_search(self, query: str) -> RequestTask:
        return self.coordinator.issue(
            Channel.SUGGESTIONS,
            lambda: self._stations.search_stations(query),
            on_success=self._view.render_suggestions,
        )

    def dismiss_suggestions(self) -> None:
        self._debouncer.cancel()
        self.coordinator.invalidate(Channel.SUGGESTIONS)
        self._view.render_suggestions([])

    # Explicit actions

    def search(self, query: str | None = None) -> RequestTask | None:
        """Search for a station and load the best match.

        Args:
            query: Query to search, or None to repeat the last one.
        """
        if query is not None:
            self._last_query = query.strip()
        query = self._last_query
        if not query:
            return None
        self._locating = False

        self.dismiss_suggestions()
        self._supersede_board()
        self._begin_loading(show_board=False)
        return self.coordinator.issue(
            Channel.STATION,
            lambda: self._stations.search_stations(query),
            on_success=self._on_search_result,
            on_failure=lambda error: self._fail(failure_message(error)),
        )

    def _on_search_result(self, stations: list[Station]) -> None:
        if not stations:
            self._fail(NO_STATION_FOUND)
            return
        self.select_station(stations[0])

    def locate(self) -> RequestTask | None:
        """Resolve the device position and load its nearest station."""
        self._locating = True
        geolocation = self._geolocation
        if geolocation is None or not geolocation.is_supported():
            self._fail(LOCATION_NOT_SUPPORTED)
            return None
        if not geolocation.is_secure_context():
            self._fail(location_failure_message(InsecureContext()))
            return None

        self._supersede_board()
        self._begin_loading(show_board=True)
        return self.coordinator.issue(
            Channel.STATION,
            lambda: self._resolve_nearest_station(geolocation),
            on_success=self.select_station,
            on_failure=lambda error: self._fail(location_failure_message(error)),
        )

    async def _resolve_nearest_station(self, geolocation: GeolocationProvider) -> Station:
        position = await geolocation.current_position(
            self.settings.geolocation_timeout_ms, self.settings.geolocation_max_age_ms
        )
        return await self._stations.find_nearest_station(position.latitude, position.longitude)

    def select_station(self, station: Station) -> RequestTask:
        """Make a station the board's focus and load its departures."""
        self.dismiss_suggestions()
        self.coordinator.invalidate(Channel.STATION)
        return self._issue_load(station)

    def load(self, station: Station | None = None) -> RequestTask | None:
        """Load the departures of a station, replacing the board on success.

        Args:
            station: Station to load, or None for the selected one.
        """
        station = station or self._selected_station
        if station is None:
            return None
        return self._issue_load(station)

    def _issue_load(self, station: Station) -> RequestTask:
        self._selected_station = station
        self._begin_loading(show_board=True)
        return self.coordinator.issue(
            Channel.DEPARTURES,
            lambda: self._departures.get_departures(
                station.lookup_key, self.settings.departures_limit
            ),
            on_success=lambda departures: self._apply_load(station, departures),
            on_failure=lambda error: self._fail(failure_message(error)),
        )

    def refresh(self) -> RequestTask | None:
        """Fetch the displayed station again, keeping the board on failure."""
        station = self._departure_set.station
        if station is None or self._state != BoardState.DISPLAYING:
            return None
        if self.coordinator.is_in_flight(Channel.DEPARTURES):
            logger.debug(f"Skipping refresh of {station.name}, a request is in flight")
            return None

        return self.coordinator.issue(
            Channel.DEPARTURES,
            lambda: self._departures.get_departures(
                station.lookup_key, self.settings.departures_limit
            ),
            on_success=lambda departures: self._apply_refresh(station, departures),
            on_failure=lambda error: self._on_refresh_failure(station, error),
        )

    def retry(self) -> RequestTask | None:
        """Replay the failed action: reload the selected station, else repeat the lookup."""
        if self._selected_station is not None:
            return self.load()
        if self._locating:
            return self.locate()
        return self.search()

    def clear_station(self) -> None:
        """Drop the selected station and return to the idle board."""
        self.coordinator.invalidate(Channel.STATION)
        self.coordinator.invalidate(Channel.DEPARTURES)
        self._stop_board_timers()
        self._departure_set.clear()
        self._selected_station = None
        self._refresh_failures = 0
        self._state = BoardState.IDLE
        self._view.set_busy(False)
        self._view.clear_error()
        self._view.show_empty_state()
        logger.info("Station cleared")

    async def shutdown(self) -> None:
        """Cancel every request and timer owned by the controller."""
        self._debouncer.cancel()
        stopped = [task for task in self._stop_board_timers() if task is not None]
        await self.coordinator.aclose()
        await asyncio.gather(*stopped, return_exceptions=True)
        logger.info("Board controller shut down")

    # Completion handlers

    def _begin_loading(self, show_board: bool) -> None:
        self._state = BoardState.LOADING
        self._view.set_busy(True)
        self._view.clear_error()
        if show_board:
            self._view.show_board()

    def _apply_load(self, station: Station, departures: list[Departure]) -> None:
        now = self._time_source.now()
        self._departure_set.replace(station, departures, now)
        self._state = BoardState.DISPLAYING
        self._refresh_failures = 0
        logger.info(f"Showing {len(self._departure_set)} departure(s) for {station.name}")

        self._view.set_busy(False)
        self._view.clear_error()
        self._view.show_board()
        self._view.render(self.display_tokens(now))

        if self._retry_ticker is not None:
            self._retry_ticker.stop()
        self._refresh_ticker.start()
        self._countdown.start()

    def _apply_refresh(self, station: Station, departures: list[Departure]) -> None:
        if self._departure_set.station != station:
            return
        now = self._time_source.now()
        self._departure_set.update(departures, now)
        self._refresh_failures = 0
        self._view.render(self.display_tokens(now))

    def _on_refresh_tick(self) -> None:
        self.refresh()

    def _on_retry_tick(self) -> None:
        if self._state == BoardState.ERROR:
            self.retry()

    def _on_refresh_failure(self, station: Station, error: LookupFailure) -> None:
        self._refresh_failures += 1
        logger.warning(
            f"Refresh of {station.name} failed ({self._refresh_failures} in a row), "
            f"keeping the last board: {error}"
        )

    def _fail(self, message: str) -> None:
        self._stop_board_timers()
        self.coordinator.invalidate(Channel.DEPARTURES)
        self._departure_set.clear()
        self._state = BoardState.ERROR
        self._view.set_busy(False)
        self._view.show_error(message)
        self._view.show_empty_state()
        logger.info(f"Board error: {message}")
        if self._retry_ticker is not None:
            self._retry_ticker.start()

    def _supersede_board(self) -> None:
        """Drop the current board so a pending load can no longer apply."""
        self.coordinator.invalidate(Channel.DEPARTURES)
        self._stop_board_timers()

    def _stop_board_timers(self) -> list[asyncio.Task[None] | None]:
        tickers = [self._countdown, self._refresh_ticker, self._retry_ticker]
        return [ticker.stop() for ticker in tickers if ticker is not None]

    # Countdown

    def display_tokens(self, now: datetime | None = None) -> list[DisplayToken]:
        now = now or self._time_source.now()
        return [derive_display_token(departure, now) for departure in self._departure_set]

    def tick(self) -> None:
        """Prune departed entries and re-render the countdowns."""
        if self._departure_set.is_empty:
            return
        now = self._time_source.now()
        removed = self._departure_set.prune(now)
        if removed:
            logger.debug(f"Pruned {removed} departed departure(s)")
        self._view.render(self.display_tokens(now))
