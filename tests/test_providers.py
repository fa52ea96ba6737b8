"""Tests for provider payload handling (no network)."""
from __future__ import annotations

import asyncio
from typing import Any

import pytest

from custom_components.airport_board.board_stats import summarize_board
from custom_components.airport_board.providers.directory.world_airports import build_airports_index
from custom_components.airport_board.providers.timetable import aviation_edge
from custom_components.airport_board.providers.timetable.aviation_edge import (
    AviationEdgeClient,
    AviationEdgeError,
    normalize_timetable,
)
from custom_components.airport_board.providers.weather.openweather import format_weather

TIMETABLE = [
    {
        "type": "arrival",
        "status": "active",
        "departure": {"iataCode": "LHR", "icaoCode": "EGLL", "scheduledTime": "2025-08-25T10:00:00.000",
                      "delay": "15", "terminal": "5", "gate": "A10"},
        "arrival": {"iataCode": "JFK", "icaoCode": "KJFK", "scheduledTime": "2025-08-25T13:05:00.000",
                    "estimatedTime": "2025-08-25T13:20:00.000", "delay": None, "terminal": "7"},
        "airline": {"name": "British Airways", "iataCode": "BA", "icaoCode": "BAW"},
        "flight": {"number": "117", "iataNumber": "BA117", "icaoNumber": "BAW117"},
        "codeshared": None,
    },
    {
        "type": "arrival",
        "status": "active",
        "departure": {"iataCode": "LHR", "scheduledTime": "2025-08-25T10:00:00.000"},
        "arrival": {"iataCode": "JFK", "scheduledTime": "2025-08-25T13:05:00.000"},
        "airline": {"name": "American Airlines", "iataCode": "AA", "icaoCode": "AAL"},
        "flight": {"iataNumber": "AA6135", "icaoNumber": "AAL6135"},
        "codeshared": {"airline": {"iataCode": "ba"}, "flight": {"iataNumber": "ba117"}},
    },
    {
        "type": "arrival",
        "status": "scheduled",
        "departure": {"iataCode": "NUF", "scheduledTime": "2025-08-25T09:00:00.000"},
        "arrival": {"iataCode": "JFK", "scheduledTime": "2025-08-25T11:00:00.000"},
        "airline": {"name": "Unknown", "iataCode": "ZZ"},
        "flight": {"iataNumber": "ZZ1"},
        "codeshared": None,
    },
    {
        "type": "arrival",
        "status": "scheduled",
        "departure": {"iataCode": "YYZ", "scheduledTime": "2025-08-25T09:00:00.000"},
        "arrival": {"iataCode": "JFK", "scheduledTime": "2025-08-25T10:45:00.000"},
        "airline": {"name": "Cargo Co", "iataCode": None, "icaoCode": "CGO"},
        "flight": {"iataNumber": None, "icaoNumber": "CGO88"},
        "codeshared": None,
    },
    {
        "type": "departure",
        "status": "scheduled",
        "departure": {"iataCode": "JFK", "scheduledTime": "2025-08-25T12:00:00.000"},
        "arrival": {"iataCode": "NUF", "scheduledTime": "2025-08-25T14:00:00.000"},
        "airline": {"name": "Unknown", "iataCode": "ZZ"},
        "flight": {"iataNumber": "ZZ2"},
        "codeshared": None,
    },
    {
        "type": "departure",
        "status": "scheduled",
        "departure": {"iataCode": "JFK", "scheduledTime": "2025-08-25T12:30:00.000"},
        "arrival": {"iataCode": "BOS", "scheduledTime": "2025-08-25T13:45:00.000"},
        "airline": {"name": "JetBlue", "iataCode": "B6"},
        "flight": {"iataNumber": "B6100"},
    },
]


def test_normalize_timetable_filters_and_flattens():
    flights = normalize_timetable(TIMETABLE)
    assert [f["flight_iata"] for f in flights] == ["BA117", "CGO88"]

    ba = flights[0]
    assert ba["airline_iata"] == "BA"
    assert ba["departure_iata"] == "LHR"
    assert ba["departure_delay"] == 15
    assert ba["arrival_delay"] is None
    assert ba["arrival_terminal"] == "7"
    assert ba["arrival_gate"] is None
    assert ba["arrival_scheduled"] == "2025-08-25T13:05:00.000"
    assert ba["board_type"] == "arrival"

    cargo = flights[1]
    assert cargo["airline_iata"] == "CGO"
    assert cargo["flight_icao"] == "CGO88"


def test_departure_to_unknown_airport_is_dropped():
    rows = [r for r in TIMETABLE if r["type"] == "departure"]
    flights = normalize_timetable(rows)
    assert flights == []
    assert summarize_board(flights, "departure")["airports"] == 0


def test_row_without_codeshared_key_is_dropped():
    row = {k: v for k, v in TIMETABLE[0].items() if k != "codeshared"}
    assert normalize_timetable([row]) == []
    assert len(normalize_timetable([TIMETABLE[0]])) == 1


def test_normalize_timetable_rejects_non_list():
    with pytest.raises(AviationEdgeError):
        normalize_timetable({"error": "No Record Found"})


def test_build_airports_index():
    rows = [
        {"iata_code": "jfk", "name": "JFK", "latitude_deg": "40.6413", "longitude_deg": -73.7781,
         "type": "large_airport", "extra": "dropped"},
        {"iata_code": "", "name": "No code"},
        {"iata_code": "JFK", "name": "Duplicate"},
        "garbage",
    ]
    index = build_airports_index(rows)
    assert list(index) == ["JFK"]
    assert index["JFK"]["name"] == "JFK"
    assert index["JFK"]["latitude_deg"] == 40.6413
    assert "extra" not in index["JFK"]
    assert build_airports_index(None) == {}


def test_format_weather_in_airport_zone():
    payload = {
        "main": {"temp": 21.456, "temp_max": 23, "temp_min": 19, "pressure": 1012, "humidity": 60},
        "wind": {"speed": 4.1, "deg": 250},
        "sys": {"sunrise": 1756116000, "sunset": 1756164600},
        "weather": [{"description": "few clouds", "icon": "02d"}],
        "visibility": 10000,
    }
    weather = format_weather(payload, "America/New_York")
    assert weather["temperature_display"] == "21.5°C"
    assert weather["visibility_km"] == 10.0
    assert weather["icon_url"] == "https://openweathermap.org/img/wn/02d@4x.png"
    # 1756116000 == 2025-08-25T10:00:00Z == 06:00 EDT
    assert weather["sunrise"] == "06:00"
    assert weather["description"] == "few clouds"


def test_format_weather_tolerates_missing_fields():
    weather = format_weather({})
    assert weather["temperature"] is None
    assert weather["sunrise"] is None
    assert weather["icon_url"] is None


class _FakeResponse:
    def __init__(self, status: int, payload: Any) -> None:
        self.status = status
        self._payload = payload

    async def __aenter__(self) -> "_FakeResponse":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    async def json(self, content_type: str | None = None) -> Any:
        return self._payload

    async def text(self) -> str:
        return str(self._payload)


class _FakeSession:
    def __init__(self, status: int, payload: Any) -> None:
        self.status = status
        self.payload = payload
        self.requests: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, params: dict[str, Any] | None = None, **_: Any) -> _FakeResponse:
        self.requests.append((url, dict(params or {})))
        return _FakeResponse(self.status, self.payload)


def _client(monkeypatch, status: int, payload: Any) -> tuple[AviationEdgeClient, _FakeSession]:
    session = _FakeSession(status, payload)
    monkeypatch.setattr(aviation_edge, "async_get_clientsession", lambda hass: session)
    return AviationEdgeClient(hass=None, api_key=" secret "), session


def test_client_fetches_timetable(monkeypatch):
    client, session = _client(monkeypatch, 200, TIMETABLE)
    flights = asyncio.run(client.async_get_timetable("jfk", "arrival"))
    assert len(flights) == 2
    url, params = session.requests[0]
    assert url == "https://aviation-edge.com/v2/public/timetable"
    assert params == {"key": "secret", "iataCode": "JFK", "type": "arrival"}


def test_client_raises_on_error_payload(monkeypatch):
    client, _ = _client(monkeypatch, 200, {"error": "No Record Found", "success": False})
    with pytest.raises(AviationEdgeError, match="No Record Found"):
        asyncio.run(client.async_get_timetable("JFK", "departure"))


def test_client_raises_on_http_error(monkeypatch):
    client, _ = _client(monkeypatch, 401, {"message": "bad key"})
    with pytest.raises(AviationEdgeError, match="HTTP 401"):
        asyncio.run(client.async_get_timetable("JFK", "departure"))


def test_client_nearby(monkeypatch):
    rows = [{"codeIataAirport": "JFK", "distance": "21.3"}, "junk"]
    client, session = _client(monkeypatch, 200, rows)
    nearby = asyncio.run(client.async_get_nearby(40.75, -73.98, 300))
    assert nearby == [{"codeIataAirport": "JFK", "distance": "21.3"}]
    assert session.requests[0][1]["distance"] == 300
