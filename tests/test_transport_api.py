"""Tests for the transport.opendata.ch adapters."""

from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock

import aiohttp
import pytest

from departure_board.adapters.transport_api import (
    TransportDepartureRepository,
    TransportHttpClient,
    TransportStationRepository,
)
from departure_board.adapters.transport_api.response_parser import ResponseParser
from departure_board.domain.errors import HttpError, LookupTimeout, NetworkError, NotFound
from tests.fakes import BASE_TIME, FakeTimeSource

LOCATIONS_RESPONSE = {
    "stations": [
        {
            "id": "8503000",
            "name": "Zürich HB",
            "coordinate": {"type": "WGS84", "x": 47.377847, "y": 8.540502},
        },
        {"id": None, "name": "Zürich (address)"},
        {"id": "8503020", "name": "Zürich Hardbrücke", "coordinate": {"x": None, "y": None}},
    ]
}

STATIONBOARD_RESPONSE = {
    "station": {"id": "8591382", "name": "Zürich, Stauffacher"},
    "stationboard": [
        {
            "stop": {
                "departure": "2024-01-15T11:07:00+0100",
                "departureTimestamp": 1705313220,
                "platform": None,
            },
            "name": "018004",
            "category": "T",
            "number": "4",
            "to": "Zürich, Bahnhof Tiefenbrunnen",
        },
        {
            "stop": {"departure": None, "departureTimestamp": 1705313700, "platform": "7"},
            "name": "IR 75",
            "category": "IR",
            "number": None,
            "to": "Konstanz",
        },
        {
            "stop": {"departure": "not a time"},
            "category": "B",
            "number": "31",
            "to": "Hegibachplatz",
        },
    ],
}


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, status: int = 200, payload: Any = None, text: str = "") -> None:
        self.status = status
        self._payload = payload
        self._text = text

    async def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *args: object) -> None:
        return None


class FakeSession:
    """Records GET requests and answers with a scripted response or error."""

    def __init__(self, response: FakeResponse | Exception) -> None:
        self.response = response
        self.requests: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append({"url": url, **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class TestTransportHttpClient:
    """Tests for TransportHttpClient."""

    @pytest.mark.asyncio
    async def test_when_ok_then_returns_decoded_body(self) -> None:
        """Given a 200 response, when fetching, then the JSON object is returned."""
        session = FakeSession(FakeResponse(payload={"stations": []}))
        client = TransportHttpClient(session, base_url="https://example.test/v1/", timeout_seconds=5)

        data = await client.get_json("/locations", {"query": "Bern"})

        assert data == {"stations": []}
        request = session.requests[0]
        assert request["url"] == "https://example.test/v1/locations"
        assert request["params"] == {"query": "Bern"}
        assert request["timeout"].total == 5

    @pytest.mark.asyncio
    async def test_when_status_not_ok_then_raises_http_error_with_preview(self) -> None:
        """Given a 503 response, when fetching, then HttpError carries status and a short preview."""
        session = FakeSession(FakeResponse(status=503, text="x" * 500))
        client = TransportHttpClient(session)

        with pytest.raises(HttpError) as exc_info:
            await client.get_json("/stationboard", {"station": "Bern"})

        assert exc_info.value.status == 503
        assert len(exc_info.value.body_preview) == 200
        assert exc_info.value.details().status_code == 503

    @pytest.mark.asyncio
    async def test_when_timeout_then_raises_lookup_timeout(self) -> None:
        client = TransportHttpClient(FakeSession(TimeoutError()))

        with pytest.raises(LookupTimeout):
            await client.get_json("/locations", {"query": "Bern"}, timeout_seconds=0.1)

    @pytest.mark.asyncio
    async def test_when_connection_fails_then_raises_network_error(self) -> None:
        client = TransportHttpClient(FakeSession(aiohttp.ClientConnectionError("refused")))

        with pytest.raises(NetworkError):
            await client.get_json("/locations", {"query": "Bern"})

    @pytest.mark.asyncio
    async def test_when_body_is_not_json_then_raises_network_error(self) -> None:
        client = TransportHttpClient(FakeSession(FakeResponse(payload=ValueError("bad json"))))

        with pytest.raises(NetworkError, match="Invalid response body"):
            await client.get_json("/locations", {"query": "Bern"})

    @pytest.mark.asyncio
    async def test_when_body_is_a_list_then_raises_network_error(self) -> None:
        client = TransportHttpClient(FakeSession(FakeResponse(payload=[1, 2])))

        with pytest.raises(NetworkError):
            await client.get_json("/locations", {"query": "Bern"})


class TestResponseParser:
    """Tests for ResponseParser."""

    def test_parse_stations_drops_entries_without_id(self) -> None:
        stations = ResponseParser.parse_stations(LOCATIONS_RESPONSE)

        assert [s.name for s in stations] == ["Zürich HB", "Zürich Hardbrücke"]
        assert stations[0].latitude == pytest.approx(47.377847)
        assert stations[0].longitude == pytest.approx(8.540502)
        assert stations[1].latitude is None

    def test_parse_stations_handles_missing_list(self) -> None:
        assert ResponseParser.parse_stations({}) == []
        assert ResponseParser.parse_stations({"stations": None}) == []

    def test_parse_departures_maps_fields_and_times(self) -> None:
        """Given a stationboard, when parsing, then times fall back from ISO to timestamp to now."""
        departures = ResponseParser.parse_departures(STATIONBOARD_RESPONSE, BASE_TIME)

        tram, train, bus = departures
        assert tram.line == "4"
        assert tram.destination == "Zürich, Bahnhof Tiefenbrunnen"
        assert tram.time == datetime(2024, 1, 15, 10, 7, tzinfo=UTC)
        assert tram.platform == ""
        assert tram.category == "T"

        assert train.line == "IR 75"
        assert train.platform == "7"
        assert train.time == datetime.fromtimestamp(1705313700, UTC)

        assert bus.line == "31"
        assert bus.time == BASE_TIME


class TestTransportStationRepository:
    """Tests for TransportStationRepository."""

    @pytest.mark.asyncio
    async def test_when_query_too_short_then_no_request(self) -> None:
        http_client = AsyncMock(spec=TransportHttpClient)
        repository = TransportStationRepository(http_client)

        assert await repository.search_stations(" Z ") == []
        http_client.get_json.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_requests_stations_and_limits_results(self) -> None:
        """Given more matches than allowed, when searching, then results are capped in API order."""
        http_client = AsyncMock(spec=TransportHttpClient)
        http_client.get_json.return_value = LOCATIONS_RESPONSE
        repository = TransportStationRepository(http_client, max_results=1)

        stations = await repository.search_stations("  Zürich ")

        http_client.get_json.assert_awaited_once_with(
            "/locations", {"query": "Zürich", "type": "station"}
        )
        assert [s.id for s in stations] == ["8503000"]

    @pytest.mark.asyncio
    async def test_nearest_sends_latitude_as_x(self) -> None:
        http_client = AsyncMock(spec=TransportHttpClient)
        http_client.get_json.return_value = LOCATIONS_RESPONSE
        repository = TransportStationRepository(http_client)

        station = await repository.find_nearest_station(47.3769, 8.5417)

        http_client.get_json.assert_awaited_once_with(
            "/locations", {"x": "47.3769", "y": "8.5417"}
        )
        assert station.name == "Zürich HB"

    @pytest.mark.asyncio
    async def test_when_nothing_nearby_then_raises_not_found(self) -> None:
        http_client = AsyncMock(spec=TransportHttpClient)
        http_client.get_json.return_value = {"stations": []}
        repository = TransportStationRepository(http_client)

        with pytest.raises(NotFound):
            await repository.find_nearest_station(0.0, 0.0)


class TestTransportDepartureRepository:
    """Tests for TransportDepartureRepository."""

    @pytest.mark.asyncio
    async def test_get_departures_requests_stationboard_with_limit(self) -> None:
        http_client = AsyncMock(spec=TransportHttpClient)
        http_client.get_json.return_value = STATIONBOARD_RESPONSE
        repository = TransportDepartureRepository(http_client, time_source=FakeTimeSource())

        departures = await repository.get_departures("8591382", limit=3)

        http_client.get_json.assert_awaited_once_with(
            "/stationboard", {"station": "8591382", "limit": "3"}
        )
        assert len(departures) == 3
        assert departures[2].time == BASE_TIME


@pytest.mark.integration
@pytest.mark.asyncio
async def test_live_search_and_stationboard() -> None:
    """Given the live API, when searching Zürich HB, then its board can be fetched."""
    async with aiohttp.ClientSession() as session:
        http_client = TransportHttpClient(session)
        stations = await TransportStationRepository(http_client).search_stations("Zürich HB")
        assert stations

        departures = await TransportDepartureRepository(http_client).get_departures(
            stations[0].id, limit=3
        )
        assert len(departures) <= 3
