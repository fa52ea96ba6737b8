"""Shared fixtures for Airport Board tests."""
from __future__ import annotations

from typing import Any

import pytest

from custom_components.airport_board.tz_resolver import TimezoneResolver


class StubFinder:
    """Stands in for TimezoneFinder with a fixed (lat, lon) -> zone table."""

    def __init__(self, zones: dict[tuple[float, float], str | None] | None = None) -> None:
        self.zones = zones or {}
        self.calls: list[tuple[float, float]] = []

    def timezone_at(self, *, lng: float, lat: float) -> str | None:
        self.calls.append((lat, lng))
        return self.zones.get((lat, lng))


JFK = {"iata_code": "JFK", "type": "large_airport", "name": "John F Kennedy International Airport",
       "latitude_deg": 40.6413, "longitude_deg": -73.7781, "continent": "NA",
       "country_name": "United States", "iso_country": "US", "region_name": "New York",
       "municipality": "New York"}
SIN = {"iata_code": "SIN", "type": "large_airport", "name": "Singapore Changi Airport",
       "latitude_deg": 1.3644, "longitude_deg": 103.9915, "continent": "AS",
       "country_name": "Singapore", "iso_country": "SG", "region_name": "Singapore",
       "municipality": "Singapore"}
LAX = {"iata_code": "LAX", "type": "large_airport", "name": "Los Angeles International Airport",
       "latitude_deg": 33.9425, "longitude_deg": -118.408, "continent": "NA",
       "country_name": "United States", "iso_country": "US", "region_name": "California",
       "municipality": "Los Angeles"}
NRT = {"iata_code": "NRT", "type": "large_airport", "name": "Narita International Airport",
       "latitude_deg": 35.7647, "longitude_deg": 140.386, "continent": "AS",
       "country_name": "Japan", "iso_country": "JP", "region_name": "Chiba",
       "municipality": "Tokyo"}
BOS = {"iata_code": "BOS", "type": "large_airport", "name": "Logan International Airport",
       "latitude_deg": 42.3643, "longitude_deg": -71.0052, "continent": "NA",
       "country_name": "United States", "iso_country": "US", "region_name": "Massachusetts",
       "municipality": "Boston"}


@pytest.fixture(scope="session")
def resolver() -> TimezoneResolver:
    return TimezoneResolver()


@pytest.fixture
def airports() -> dict[str, dict[str, Any]]:
    return {a["iata_code"]: dict(a) for a in (JFK, SIN, LAX, NRT, BOS)}


def make_flight(dep: str, arr: str, dep_time: Any, arr_time: Any, **extra: Any) -> dict[str, Any]:
    flight = {
        "airline_iata": "XX",
        "airline_name": "Example Air",
        "flight_iata": f"XX{abs(hash((dep, arr, str(dep_time)))) % 1000}",
        "departure_iata": dep,
        "arrival_iata": arr,
        "departure_scheduled": dep_time,
        "arrival_scheduled": arr_time,
        "departure_delay": None,
        "arrival_delay": None,
        "flight_status": "scheduled",
    }
    flight.update(extra)
    return flight


@pytest.fixture
def flight_factory():
    return make_flight
