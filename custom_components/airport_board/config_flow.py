"""Config and options flow for Airport Board."""
from __future__ import annotations

import re
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import ConfigEntry, ConfigFlow, ConfigFlowResult, OptionsFlow
from homeassistant.const import CONF_LATITUDE, CONF_LONGITUDE
from homeassistant.core import callback
from homeassistant.helpers import config_validation as cv

from .const import (
    CONF_AIRPORT_IATA,
    CONF_AVIATION_EDGE_KEY,
    CONF_CACHE_TTL_DAYS,
    CONF_DISPLAY_MARGIN_MINUTES,
    CONF_MAX_FLIGHTS,
    CONF_OPENWEATHER_KEY,
    CONF_SCAN_INTERVAL_MINUTES,
    CONF_SEARCH_RADIUS_KM,
    DEFAULT_CACHE_TTL_DAYS,
    DEFAULT_DISPLAY_MARGIN_MINUTES,
    DEFAULT_MAX_FLIGHTS,
    DEFAULT_SCAN_INTERVAL_MINUTES,
    DEFAULT_SEARCH_RADIUS_KM,
    DOMAIN,
)

_IATA_RE = r"[A-Z0-9]{3}"


class AirportBoardConfigFlow(ConfigFlow, domain=DOMAIN):
    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> ConfigFlowResult:
        errors: dict[str, str] = {}
        if user_input is not None:
            iata = (user_input.get(CONF_AIRPORT_IATA) or "").strip().upper()
            if iata and not re.fullmatch(_IATA_RE, iata):
                errors[CONF_AIRPORT_IATA] = "invalid_iata"
            else:
                data = {**user_input, CONF_AIRPORT_IATA: iata or None}
                title = f"Airport Board ({iata})" if iata else "Airport Board (nearest)"
                return self.async_create_entry(title=title, data=data)

        schema = vol.Schema(
            {
                vol.Required(CONF_AVIATION_EDGE_KEY): cv.string,
                vol.Optional(CONF_OPENWEATHER_KEY, default=""): cv.string,
                vol.Optional(CONF_LATITUDE, default=self.hass.config.latitude): cv.latitude,
                vol.Optional(CONF_LONGITUDE, default=self.hass.config.longitude): cv.longitude,
                vol.Optional(CONF_AIRPORT_IATA, default=""): cv.string,
            }
        )
        return self.async_show_form(step_id="user", data_schema=schema, errors=errors)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        return AirportBoardOptionsFlow()


class AirportBoardOptionsFlow(OptionsFlow):
    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> ConfigFlowResult:
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        opts = self.config_entry.options
        schema = vol.Schema(
            {
                vol.Optional(
                    CONF_SCAN_INTERVAL_MINUTES,
                    default=opts.get(CONF_SCAN_INTERVAL_MINUTES, DEFAULT_SCAN_INTERVAL_MINUTES),
                ): vol.All(vol.Coerce(int), vol.Range(min=1, max=1440)),
                vol.Optional(
                    CONF_SEARCH_RADIUS_KM,
                    default=opts.get(CONF_SEARCH_RADIUS_KM, DEFAULT_SEARCH_RADIUS_KM),
                ): vol.All(vol.Coerce(int), vol.Range(min=1, max=2000)),
                vol.Optional(
                    CONF_DISPLAY_MARGIN_MINUTES,
                    default=opts.get(CONF_DISPLAY_MARGIN_MINUTES, DEFAULT_DISPLAY_MARGIN_MINUTES),
                ): vol.All(vol.Coerce(int), vol.Range(min=0, max=120)),
                vol.Optional(
                    CONF_CACHE_TTL_DAYS,
                    default=opts.get(CONF_CACHE_TTL_DAYS, DEFAULT_CACHE_TTL_DAYS),
                ): vol.All(vol.Coerce(int), vol.Range(min=1, max=365)),
                vol.Optional(
                    CONF_MAX_FLIGHTS,
                    default=opts.get(CONF_MAX_FLIGHTS, DEFAULT_MAX_FLIGHTS),
                ): vol.All(vol.Coerce(int), vol.Range(min=1, max=2000)),
            }
        )
        return self.async_show_form(step_id="init", data_schema=schema)
