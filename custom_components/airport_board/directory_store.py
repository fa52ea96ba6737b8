"""Local cache storage for the world airports index."""
from __future__ import annotations

from datetime import timedelta
import logging
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store
from homeassistant.util import dt as dt_util

from .const import DOMAIN
from .providers.directory.world_airports import async_fetch_world_airports, build_airports_index

_LOGGER = logging.getLogger(__name__)

STORE_KEY = f"{DOMAIN}_world_airports"
STORE_VERSION = 1
_MEMORY_KEY = "airports_index"


def _store(hass: HomeAssistant) -> Store:
    return Store(hass, STORE_VERSION, STORE_KEY)


def _is_stale(entry: dict[str, Any], ttl_days: int) -> bool:
    fetched_at = entry.get("fetched_at")
    if not isinstance(fetched_at, str):
        return True
    dt = dt_util.parse_datetime(fetched_at)
    if not dt:
        return True
    return (dt_util.utcnow() - dt_util.as_utc(dt)) > timedelta(days=ttl_days)


async def async_get_airports_index(
    hass: HomeAssistant, ttl_days: int
) -> dict[str, dict[str, Any]]:
    """Return the IATA-keyed airports index, refetching when stale.

    A stale index is still returned if the refetch fails.
    """
    memory = hass.data.setdefault(DOMAIN, {})
    entry = memory.get(_MEMORY_KEY)
    if not isinstance(entry, dict):
        entry = await _store(hass).async_load() or {}

    index = entry.get("index") if isinstance(entry.get("index"), dict) else {}
    if index and not _is_stale(entry, ttl_days):
        memory[_MEMORY_KEY] = entry
        return index

    rows = await async_fetch_world_airports(hass)
    fresh = build_airports_index(rows) if rows else {}
    if not fresh:
        if index:
            _LOGGER.warning("Using stale world airports cache (%d airports)", len(index))
        return index

    entry = {"fetched_at": dt_util.utcnow().isoformat(), "index": fresh}
    memory[_MEMORY_KEY] = entry
    await _store(hass).async_save(entry)
    _LOGGER.debug("Cached %d airports", len(fresh))
    return fresh


async def async_clear_cache(hass: HomeAssistant) -> None:
    hass.data.setdefault(DOMAIN, {}).pop(_MEMORY_KEY, None)
    await _store(hass).async_remove()
