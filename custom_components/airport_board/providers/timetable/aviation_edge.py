"""Aviation Edge timetable provider (arrivals/departures + nearby airports).

Base URL: https://aviation-edge.com/v2/public
Auth: `key` query parameter.

Timetable times are airport-local civil timestamps without an offset
(e.g. "2025-08-25T15:00:00.000").
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import aiohttp
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession

_LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://aviation-edge.com/v2/public"

# Placeholder IATA used by the timetable for an unknown airport
UNKNOWN_IATA = "NUF"


class AviationEdgeError(Exception):
    """Aviation Edge API error."""


def _delay(val: Any) -> int | None:
    if val is None or val == "":
        return None
    try:
        return int(float(val))
    except (TypeError, ValueError):
        return None


def _first(*vals: Any) -> Any:
    for v in vals:
        if v:
            return v
    return None


def normalize_timetable(payload: Any) -> list[dict[str, Any]]:
    """Flatten timetable rows, dropping codeshares and unknown far-end airports.

    Only rows that explicitly carry `codeshared: null` are operated flights;
    a row without the key is treated as a codeshare.
    """
    if not isinstance(payload, list):
        raise AviationEdgeError("Invalid API response format")

    flights: list[dict[str, Any]] = []
    for row in payload:
        if not isinstance(row, dict):
            continue
        if "codeshared" not in row or row["codeshared"] is not None:
            continue
        airline = row.get("airline") or {}
        flight = row.get("flight") or {}
        dep = row.get("departure") or {}
        arr = row.get("arrival") or {}
        if UNKNOWN_IATA in (dep.get("iataCode"), arr.get("iataCode")):
            continue

        flights.append(
            {
                "airline_iata": _first(airline.get("iataCode"), airline.get("icaoCode")),
                "airline_icao": airline.get("icaoCode"),
                "airline_name": airline.get("name"),
                "flight_iata": _first(flight.get("iataNumber"), flight.get("icaoNumber")),
                "flight_icao": flight.get("icaoNumber"),
                "arrival_iata": arr.get("iataCode"),
                "arrival_icao": arr.get("icaoCode"),
                "arrival_scheduled": arr.get("scheduledTime"),
                "arrival_estimated": arr.get("estimatedTime"),
                "arrival_delay": _delay(arr.get("delay")),
                "arrival_terminal": arr.get("terminal"),
                "arrival_gate": arr.get("gate"),
                "departure_iata": dep.get("iataCode"),
                "departure_icao": dep.get("icaoCode"),
                "departure_scheduled": dep.get("scheduledTime"),
                "departure_estimated": dep.get("estimatedTime"),
                "departure_delay": _delay(dep.get("delay")),
                "departure_terminal": dep.get("terminal"),
                "departure_gate": dep.get("gate"),
                "flight_status": row.get("status"),
                "board_type": row.get("type"),
            }
        )
    return flights


@dataclass
class AviationEdgeClient:
    hass: HomeAssistant
    api_key: str
    base_url: str = DEFAULT_BASE_URL

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        session = async_get_clientsession(self.hass)
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        query = {"key": self.api_key.strip(), **params}
        async with session.get(url, params=query, timeout=aiohttp.ClientTimeout(total=30)) as resp:
            if resp.status >= 400:
                text = await resp.text()
                raise AviationEdgeError(f"HTTP {resp.status}: {text[:300]}")
            payload = await resp.json(content_type=None)

        # Errors come back as {"error": "..."} with HTTP 200
        if isinstance(payload, dict) and payload.get("error"):
            raise AviationEdgeError(str(payload.get("error")))
        return payload

    async def async_get_timetable(self, iata: str, board_type: str) -> list[dict[str, Any]]:
        """Return normalized arrivals or departures for an airport."""
        payload = await self._get(
            "timetable", {"iataCode": iata.strip().upper(), "type": board_type}
        )
        return normalize_timetable(payload)

    async def async_get_nearby(
        self, lat: float, lon: float, distance_km: float
    ) -> list[dict[str, Any]]:
        """Return raw nearby-airport rows (codeIataAirport, distance, ...)."""
        try:
            payload = await self._get(
                "nearby", {"lat": lat, "lng": lon, "distance": distance_km}
            )
        except (aiohttp.ClientError, TimeoutError) as err:
            _LOGGER.warning("Nearby airport lookup failed: %s", err)
            return []
        if not isinstance(payload, list):
            raise AviationEdgeError("Invalid API response format")
        return [row for row in payload if isinstance(row, dict)]
