"""Board refresh: locate the airport, fetch timetables, enrich, summarize."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import Any

import aiohttp
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_LATITUDE, CONF_LONGITUDE
from homeassistant.core import HomeAssistant
from homeassistant.helpers.dispatcher import async_dispatcher_send
from homeassistant.util import dt as dt_util

from .board_stats import summarize_board
from .const import (
    BOARD_ARRIVAL,
    BOARD_DEPARTURE,
    CONF_AIRPORT_IATA,
    CONF_AVIATION_EDGE_KEY,
    CONF_CACHE_TTL_DAYS,
    CONF_DISPLAY_MARGIN_MINUTES,
    CONF_MAX_FLIGHTS,
    CONF_OPENWEATHER_KEY,
    CONF_SEARCH_RADIUS_KM,
    DATA_BOARD,
    DATA_REFRESH_LOCK,
    DATA_RESOLVER,
    DEFAULT_CACHE_TTL_DAYS,
    DEFAULT_DISPLAY_MARGIN_MINUTES,
    DEFAULT_MAX_FLIGHTS,
    DEFAULT_SEARCH_RADIUS_KM,
    DOMAIN,
    SIGNAL_BOARD_UPDATED,
)
from .directory_store import async_get_airports_index
from .enrich import apply_time_status, enrich_flights
from .location_time import LocationTime, location_time_info
from .nearest_airport import closest_airport, select_nearest_airport
from .providers.timetable.aviation_edge import AviationEdgeClient, AviationEdgeError
from .providers.weather.openweather import OpenWeatherProvider
from .tz_resolver import TimezoneResolver

_LOGGER = logging.getLogger(__name__)


@dataclass
class BoardState:
    airport: dict[str, Any] | None = None
    location_time: LocationTime | None = None
    arrivals: list[dict[str, Any]] = field(default_factory=list)
    departures: list[dict[str, Any]] = field(default_factory=list)
    arrivals_summary: dict[str, Any] = field(default_factory=dict)
    departures_summary: dict[str, Any] = field(default_factory=dict)
    weather: dict[str, Any] | None = None
    updated_at: datetime | None = None
    error: str | None = None


def get_option(options: dict[str, Any], key: str, default: Any) -> Any:
    val = options.get(key, default)
    return val if val is not None else default


def entry_runtime(hass: HomeAssistant, entry_id: str) -> dict[str, Any]:
    return hass.data.setdefault(DOMAIN, {}).setdefault(entry_id, {})


def get_board(hass: HomeAssistant, entry_id: str) -> BoardState:
    runtime = entry_runtime(hass, entry_id)
    board = runtime.get(DATA_BOARD)
    if isinstance(board, BoardState):
        return board
    board = BoardState()
    runtime[DATA_BOARD] = board
    return board


def board_location(hass: HomeAssistant, entry: ConfigEntry) -> tuple[float, float]:
    """Device location for this entry: configured, else Home Assistant's home."""
    lat = entry.data.get(CONF_LATITUDE, hass.config.latitude)
    lon = entry.data.get(CONF_LONGITUDE, hass.config.longitude)
    return float(lat), float(lon)


async def async_resolve_airport(
    client: AviationEdgeClient,
    airports: dict[str, dict[str, Any]],
    lat: float,
    lon: float,
    radius_km: float,
    iata_override: str | None = None,
) -> dict[str, Any] | None:
    if iata_override:
        code = iata_override.strip().upper()
        airport = airports.get(code)
        if airport is None:
            _LOGGER.warning("Configured airport %s not found in world airports", code)
            return None
        return {**airport, "distance_to_airport": None}

    try:
        nearby = await client.async_get_nearby(lat, lon, radius_km)
    except AviationEdgeError as err:
        _LOGGER.warning("Error fetching nearby airports: %s", err)
        nearby = []

    airport = select_nearest_airport(nearby, airports)
    if airport is None:
        # Provider gave nothing usable; rank the dataset ourselves
        airport = closest_airport(lat, lon, airports, max_distance_km=radius_km)
    return airport


async def _async_fetch_side(
    client: AviationEdgeClient, iata: str, board_type: str
) -> list[dict[str, Any]]:
    try:
        return await client.async_get_timetable(iata, board_type)
    except (AviationEdgeError, aiohttp.ClientError, TimeoutError) as err:
        _LOGGER.warning("Error fetching %s timetable for %s: %s", board_type, iata, err)
        return []


def _prepare_board(
    flights: list[dict[str, Any]],
    side: str,
    airports: dict[str, dict[str, Any]],
    resolver: TimezoneResolver,
    now: datetime,
    margin_minutes: float,
    max_flights: int,
) -> tuple[list[dict[str, Any]], dict[str, Any]]:
    """CPU-bound part of the refresh; runs in the executor."""
    if max_flights and len(flights) > max_flights:
        flights = flights[:max_flights]
    enriched = enrich_flights(flights, airports, resolver)
    enriched = apply_time_status(enriched, side, now, margin_minutes)
    enriched.sort(key=lambda f: (f.get(f"{side}_scheduled") or ""))
    return enriched, summarize_board(enriched, side)


async def async_refresh_board(hass: HomeAssistant, entry: ConfigEntry) -> BoardState | None:
    """Rebuild the board for a config entry and notify listeners.

    Returns None without touching hass.data when the entry is not set up.
    Concurrent refreshes of one entry run one after another.
    """
    runtime = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    resolver = runtime.get(DATA_RESOLVER) if runtime else None
    if resolver is None:
        _LOGGER.debug("Skipping refresh for entry %s: not set up", entry.entry_id)
        return None

    lock = runtime.setdefault(DATA_REFRESH_LOCK, asyncio.Lock())
    async with lock:
        return await _async_build_board(hass, entry, resolver)


async def _async_build_board(
    hass: HomeAssistant, entry: ConfigEntry, resolver: TimezoneResolver
) -> BoardState:
    options = dict(entry.options)

    radius_km = float(get_option(options, CONF_SEARCH_RADIUS_KM, DEFAULT_SEARCH_RADIUS_KM))
    margin = float(get_option(options, CONF_DISPLAY_MARGIN_MINUTES, DEFAULT_DISPLAY_MARGIN_MINUTES))
    ttl_days = int(get_option(options, CONF_CACHE_TTL_DAYS, DEFAULT_CACHE_TTL_DAYS))
    max_flights = int(get_option(options, CONF_MAX_FLIGHTS, DEFAULT_MAX_FLIGHTS))

    board = BoardState(updated_at=dt_util.utcnow())
    client = AviationEdgeClient(hass, entry.data[CONF_AVIATION_EDGE_KEY])
    lat, lon = board_location(hass, entry)

    airports = await async_get_airports_index(hass, ttl_days)
    if not airports:
        board.error = "airports_unavailable"
        return _publish(hass, entry, board)

    airport = await async_resolve_airport(
        client, airports, lat, lon, radius_km, entry.data.get(CONF_AIRPORT_IATA)
    )
    if airport is None:
        board.error = "no_airport_nearby"
        return _publish(hass, entry, board)
    board.airport = airport

    a_lat = airport.get("latitude_deg")
    a_lon = airport.get("longitude_deg")
    board.location_time = location_time_info(
        a_lat, a_lon, dt_util.utcnow(), resolver, current_lat=lat, current_lon=lon
    )
    if board.location_time is None:
        board.error = "airport_time_unavailable"
        return _publish(hass, entry, board)
    airport_now = board.location_time.local

    iata = airport["iata_code"]
    arrivals = await _async_fetch_side(client, iata, BOARD_ARRIVAL)
    departures = await _async_fetch_side(client, iata, BOARD_DEPARTURE)

    board.arrivals, board.arrivals_summary = await hass.async_add_executor_job(
        _prepare_board, arrivals, "arrival", airports, resolver, airport_now, margin, max_flights
    )
    board.departures, board.departures_summary = await hass.async_add_executor_job(
        _prepare_board, departures, "departure", airports, resolver, airport_now, margin, max_flights
    )

    weather_key = (entry.data.get(CONF_OPENWEATHER_KEY) or "").strip()
    if weather_key:
        board.weather = await OpenWeatherProvider(hass, weather_key).async_get_weather(
            a_lat, a_lon, board.location_time.timezone_name
        )

    _LOGGER.debug(
        "Board %s refreshed: %d arrivals, %d departures",
        iata,
        len(board.arrivals),
        len(board.departures),
    )
    return _publish(hass, entry, board)


def _publish(hass: HomeAssistant, entry: ConfigEntry, board: BoardState) -> BoardState:
    if board.error:
        _LOGGER.warning("Board refresh incomplete: %s", board.error)
    entry_runtime(hass, entry.entry_id)[DATA_BOARD] = board
    async_dispatcher_send(hass, f"{SIGNAL_BOARD_UPDATED}_{entry.entry_id}")
    return board
