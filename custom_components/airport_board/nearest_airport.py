"""Pick the board airport closest to a location."""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable

_LOGGER = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
DEFAULT_AIRPORT_TYPES = ("large_airport", "medium_airport")


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres."""
    lat1_r, lon1_r = math.radians(lat1), math.radians(lon1)
    lat2_r, lon2_r = math.radians(lat2), math.radians(lon2)

    dlat = lat2_r - lat1_r
    dlon = lon2_r - lon1_r

    a = math.sin(dlat / 2.0) ** 2 + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlon / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def select_nearest_airport(
    nearby: Iterable[dict[str, Any]],
    airports: dict[str, dict[str, Any]],
) -> dict[str, Any] | None:
    """Join provider 'nearby' rows with the airports index; return the closest.

    Rows whose IATA code is not in the index are dropped.
    """
    matched: list[dict[str, Any]] = []
    for row in nearby:
        code = (row.get("codeIataAirport") or "").strip().upper()
        airport = airports.get(code)
        if not airport:
            continue
        try:
            distance = float(row.get("distance"))
        except (TypeError, ValueError):
            continue
        matched.append({**airport, "distance_to_airport": distance})

    if not matched:
        _LOGGER.debug("No matching airports found between nearby and world datasets")
        return None
    return min(matched, key=lambda a: a["distance_to_airport"])


def closest_airport(
    lat: float,
    lon: float,
    airports: dict[str, dict[str, Any]],
    types: tuple[str, ...] = DEFAULT_AIRPORT_TYPES,
    max_distance_km: float | None = None,
) -> dict[str, Any] | None:
    """Rank the airports index by distance from (lat, lon)."""
    best: dict[str, Any] | None = None
    best_km = math.inf
    for airport in airports.values():
        if types and airport.get("type") not in types:
            continue
        a_lat = airport.get("latitude_deg")
        a_lon = airport.get("longitude_deg")
        if a_lat is None or a_lon is None:
            continue
        km = haversine_km(lat, lon, a_lat, a_lon)
        if km < best_km:
            best, best_km = airport, km

    if best is None or (max_distance_km is not None and best_km > max_distance_km):
        return None
    return {**best, "distance_to_airport": round(best_km, 1)}
