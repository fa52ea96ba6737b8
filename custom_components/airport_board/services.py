"""Service registrations: manual refresh and cache reset."""
from __future__ import annotations

import logging

import voluptuous as vol
from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.helpers import config_validation as cv

from .board_manager import async_refresh_board
from .const import DOMAIN, SERVICE_CLEAR_CACHE, SERVICE_REFRESH_NOW
from .directory_store import async_clear_cache

_LOGGER = logging.getLogger(__name__)

REFRESH_SCHEMA = vol.Schema({vol.Optional("entry_id"): cv.string})
CLEAR_SCHEMA = vol.Schema({})


async def async_register_services(hass: HomeAssistant) -> None:
    """Register services once for all config entries."""
    if hass.services.has_service(DOMAIN, SERVICE_REFRESH_NOW):
        return

    async def _refresh(call: ServiceCall) -> None:
        data = REFRESH_SCHEMA(dict(call.data))
        wanted = data.get("entry_id")
        for entry in hass.config_entries.async_entries(DOMAIN):
            if entry.state is not ConfigEntryState.LOADED:
                continue
            if wanted and entry.entry_id != wanted:
                continue
            await async_refresh_board(hass, entry)

    async def _clear(call: ServiceCall) -> None:
        _ = CLEAR_SCHEMA(dict(call.data))
        await async_clear_cache(hass)
        _LOGGER.info("World airports cache cleared")

    hass.services.async_register(DOMAIN, SERVICE_REFRESH_NOW, _refresh, schema=REFRESH_SCHEMA)
    hass.services.async_register(DOMAIN, SERVICE_CLEAR_CACHE, _clear, schema=CLEAR_SCHEMA)


def async_unregister_services(hass: HomeAssistant) -> None:
    hass.services.async_remove(DOMAIN, SERVICE_REFRESH_NOW)
    hass.services.async_remove(DOMAIN, SERVICE_CLEAR_CACHE)
