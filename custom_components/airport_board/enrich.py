"""Join timetable rows with airport records and add derived fields.

Each derived field is computed independently per flight: a failure sets
that field to None and is logged, without touching the flight's other
fields or any other flight. Input records are never mutated.
"""
from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Iterable

from .air_time import compute_air_time
from .antimeridian import crosses_idl, route_segments
from .time_status import DISPLAY_MARGIN_MINUTES, classify_time_status
from .tz_resolver import TimezoneResolver

_LOGGER = logging.getLogger(__name__)

SIDES = ("departure", "arrival")

# output suffix -> airport dataset field
_AIRPORT_DETAIL_FIELDS = {
    "airport_type": "type",
    "airport_latitude": "latitude_deg",
    "airport_longitude": "longitude_deg",
    "airport_name": "name",
    "airport_continent": "continent",
    "airport_country": "country_name",
    "airport_country_code": "iso_country",
    "airport_municipality": "municipality",
    "airport_region": "region_name",
}


def _flight_label(flight: dict[str, Any]) -> str:
    return str(flight.get("flight_iata") or flight.get("flight_icao") or "?")


def airport_details(side: str, airport: dict[str, Any] | None) -> dict[str, Any]:
    """Return the `{side}_airport_*` fields for one endpoint."""
    airport = airport or {}
    return {
        f"{side}_{suffix}": airport.get(field) for suffix, field in _AIRPORT_DETAIL_FIELDS.items()
    }


def intersection_idl(dep_lon: float | None, arr_lon: float | None) -> str | None:
    if dep_lon is None or arr_lon is None:
        return None
    return "yes" if crosses_idl(dep_lon, arr_lon) else "no"


def flight_duration_minutes(
    flight: dict[str, Any], resolver: TimezoneResolver
) -> int | None:
    """Scheduled block time in minutes, or None when inputs are missing."""
    dep_time = flight.get("departure_scheduled")
    arr_time = flight.get("arrival_scheduled")
    coords = (
        flight.get("departure_airport_latitude"),
        flight.get("departure_airport_longitude"),
        flight.get("arrival_airport_latitude"),
        flight.get("arrival_airport_longitude"),
    )
    if not dep_time or not arr_time or any(c is None for c in coords):
        return None
    dep_lat, dep_lon, arr_lat, arr_lon = coords
    air_time = compute_air_time(dep_time, dep_lat, dep_lon, arr_time, arr_lat, arr_lon, resolver)
    return air_time.total_minutes


def enrich_flight(
    flight: dict[str, Any],
    airports: dict[str, dict[str, Any]],
    resolver: TimezoneResolver,
) -> dict[str, Any]:
    out = dict(flight)
    for side in SIDES:
        iata = (flight.get(f"{side}_iata") or "").strip().upper()
        out.update(airport_details(side, airports.get(iata)))

    dep_point = (out.get("departure_airport_longitude"), out.get("departure_airport_latitude"))
    arr_point = (out.get("arrival_airport_longitude"), out.get("arrival_airport_latitude"))

    try:
        out["intersection_idl"] = intersection_idl(dep_point[0], arr_point[0])
    except Exception as err:  # noqa: BLE001
        _LOGGER.warning("IDL check failed for %s: %s", _flight_label(flight), err)
        out["intersection_idl"] = None

    out["route"] = None
    if out["intersection_idl"] is not None and None not in dep_point + arr_point:
        try:
            out["route"] = route_segments(dep_point, arr_point)
        except Exception as err:  # noqa: BLE001
            _LOGGER.warning("Route split failed for %s: %s", _flight_label(flight), err)

    try:
        out["flight_duration"] = flight_duration_minutes(out, resolver)
    except Exception as err:  # noqa: BLE001
        _LOGGER.warning("Error calculating flight duration for %s: %s", _flight_label(flight), err)
        out["flight_duration"] = None

    return out


def enrich_flights(
    flights: Iterable[dict[str, Any]],
    airports: dict[str, dict[str, Any]],
    resolver: TimezoneResolver,
) -> list[dict[str, Any]]:
    """Add airport details, intersection_idl, route and flight_duration."""
    return [enrich_flight(f, airports, resolver) for f in flights]


def apply_time_status(
    flights: Iterable[dict[str, Any]],
    side: str,
    now: datetime,
    margin_minutes: float = DISPLAY_MARGIN_MINUTES,
) -> list[dict[str, Any]]:
    """Add `{side}_time_status` and `{side}_time_status_code` to each flight.

    `now` should be in the airport's civil frame: scheduled times are
    airport wall-clock time.
    """
    result: list[dict[str, Any]] = []
    for flight in flights:
        out = dict(flight)
        try:
            status = classify_time_status(
                flight.get(f"{side}_scheduled"),
                flight.get(f"{side}_delay"),
                now,
                margin_minutes,
            )
        except Exception as err:  # noqa: BLE001
            _LOGGER.warning("Time status failed for %s: %s", _flight_label(flight), err)
            out[f"{side}_time_status"] = None
            out[f"{side}_time_status_code"] = None
        else:
            out[f"{side}_time_status"] = status.label
            out[f"{side}_time_status_code"] = status.code
        result.append(out)
    return result
