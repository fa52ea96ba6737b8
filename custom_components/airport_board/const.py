"""Constants for the Airport Board integration."""
from __future__ import annotations

from homeassistant.const import Platform

DOMAIN = "airport_board"
PLATFORMS: list[Platform] = [Platform.SENSOR]

# Config entry data
CONF_AVIATION_EDGE_KEY = "aviation_edge_api_key"
CONF_OPENWEATHER_KEY = "openweather_api_key"
CONF_AIRPORT_IATA = "airport_iata"

# Options
CONF_SCAN_INTERVAL_MINUTES = "scan_interval_minutes"
CONF_SEARCH_RADIUS_KM = "search_radius_km"
CONF_DISPLAY_MARGIN_MINUTES = "display_margin_minutes"
CONF_CACHE_TTL_DAYS = "cache_ttl_days"
CONF_MAX_FLIGHTS = "max_flights"

DEFAULT_SCAN_INTERVAL_MINUTES = 15
DEFAULT_SEARCH_RADIUS_KM = 300
DEFAULT_DISPLAY_MARGIN_MINUTES = 10
DEFAULT_CACHE_TTL_DAYS = 7
DEFAULT_MAX_FLIGHTS = 300

# hass.data keys
DATA_RESOLVER = "resolver"
DATA_BOARD = "board"
DATA_UNSUB_REFRESH = "unsub_refresh"
DATA_REFRESH_LOCK = "refresh_lock"

SIGNAL_BOARD_UPDATED = f"{DOMAIN}_board_updated"

SERVICE_REFRESH_NOW = "refresh_now"
SERVICE_CLEAR_CACHE = "clear_cache"

BOARD_ARRIVAL = "arrival"
BOARD_DEPARTURE = "departure"
