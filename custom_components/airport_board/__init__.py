"""Airport Board integration."""
from __future__ import annotations

from datetime import timedelta

from homeassistant.config_entries import ConfigEntry, ConfigEntryState
from homeassistant.core import HomeAssistant
from homeassistant.helpers.event import async_track_time_interval

from .board_manager import get_option, async_refresh_board, entry_runtime
from .const import (
    CONF_SCAN_INTERVAL_MINUTES,
    DATA_RESOLVER,
    DATA_UNSUB_REFRESH,
    DEFAULT_SCAN_INTERVAL_MINUTES,
    DOMAIN,
    PLATFORMS,
)
from .services import async_register_services, async_unregister_services
from .tz_resolver import TimezoneResolver


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Airport Board from a config entry."""
    runtime = entry_runtime(hass, entry.entry_id)

    # Loading the zone dataset touches disk; keep it off the event loop
    runtime[DATA_RESOLVER] = await hass.async_add_executor_job(TimezoneResolver)

    await async_register_services(hass)
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    minutes = int(get_option(dict(entry.options), CONF_SCAN_INTERVAL_MINUTES, DEFAULT_SCAN_INTERVAL_MINUTES))

    async def _periodic_refresh(_now) -> None:
        await async_refresh_board(hass, entry)

    runtime[DATA_UNSUB_REFRESH] = async_track_time_interval(
        hass, _periodic_refresh, timedelta(minutes=max(1, minutes))
    )
    entry.async_on_unload(entry.add_update_listener(_async_options_updated))

    hass.async_create_task(async_refresh_board(hass, entry))
    return True


async def _async_options_updated(hass: HomeAssistant, entry: ConfigEntry) -> None:
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unloaded = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if not unloaded:
        return False

    runtime = hass.data.get(DOMAIN, {}).pop(entry.entry_id, {})
    unsub = runtime.get(DATA_UNSUB_REFRESH)
    if unsub:
        unsub()
    others = [
        e
        for e in hass.config_entries.async_entries(DOMAIN)
        if e.entry_id != entry.entry_id and e.state is ConfigEntryState.LOADED
    ]
    if not others:
        async_unregister_services(hass)
    return True
