"""World airports dataset provider (cleaned OurAirports JSON on S3)."""
from __future__ import annotations

import logging
from typing import Any

import aiohttp
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession

_LOGGER = logging.getLogger(__name__)

WORLD_AIRPORTS_URL = (
    "https://worldairportsdata.s3.eu-central-1.amazonaws.com/world_airports_clean5.json"
)

AIRPORT_FIELDS = (
    "type",
    "name",
    "latitude_deg",
    "longitude_deg",
    "elevation_ft",
    "continent",
    "country_name",
    "iso_country",
    "region_name",
    "iso_region",
    "municipality",
    "icao_code",
    "iata_code",
    "home_link",
    "wikipedia_link",
    "country_name_new",
)


def _coord(val: Any) -> float | None:
    if val is None or val == "":
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def build_airports_index(rows: Any) -> dict[str, dict[str, Any]]:
    """Index dataset rows by IATA code, keeping the known fields only."""
    index: dict[str, dict[str, Any]] = {}
    if not isinstance(rows, list):
        return index
    for row in rows:
        if not isinstance(row, dict):
            continue
        iata = (row.get("iata_code") or "").strip().upper()
        if not iata:
            continue
        airport = {k: row.get(k) for k in AIRPORT_FIELDS}
        airport["iata_code"] = iata
        airport["latitude_deg"] = _coord(row.get("latitude_deg"))
        airport["longitude_deg"] = _coord(row.get("longitude_deg"))
        index.setdefault(iata, airport)
    return index


async def async_fetch_world_airports(
    hass: HomeAssistant,
    url: str | None = None,
) -> list[dict[str, Any]] | None:
    """Download the raw dataset rows. Returns None on failure."""
    src = (url or "").strip() or WORLD_AIRPORTS_URL
    try:
        session = async_get_clientsession(hass)
        async with session.get(src, timeout=aiohttp.ClientTimeout(total=60)) as resp:
            if resp.status != 200:
                _LOGGER.warning("World airports download failed: HTTP %s", resp.status)
                return None
            payload = await resp.json(content_type=None)
    except (aiohttp.ClientError, TimeoutError, ValueError) as err:
        _LOGGER.warning("Error fetching airport data: %s", err)
        return None

    if not isinstance(payload, list):
        _LOGGER.warning("World airports payload is not a list")
        return None
    return payload
