"""Airport Board sensors: board airport, arrivals, departures, weather.

Sensors hold no data of their own; they render the BoardState stored by
board_manager and redraw when the board-updated signal fires.
"""
from __future__ import annotations

from typing import Any, Callable

from homeassistant.components.sensor import SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import UnitOfTemperature
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.dispatcher import async_dispatcher_connect

from .board_manager import BoardState, get_board
from .const import SIGNAL_BOARD_UPDATED


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry, async_add_entities) -> None:
    async_add_entities(
        [
            AirportBoardAirportSensor(hass, entry),
            AirportBoardFlightsSensor(hass, entry, "arrival"),
            AirportBoardFlightsSensor(hass, entry, "departure"),
            AirportBoardWeatherSensor(hass, entry),
        ]
    )


class _AirportBoardSensor(SensorEntity):
    _attr_should_poll = False

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry) -> None:
        self.hass = hass
        self.entry = entry
        self._unsub: Callable[[], None] | None = None

    @property
    def board(self) -> BoardState:
        return get_board(self.hass, self.entry.entry_id)

    async def async_added_to_hass(self) -> None:
        @callback
        def _on_board_updated() -> None:
            self.async_write_ha_state()

        self._unsub = async_dispatcher_connect(
            self.hass, f"{SIGNAL_BOARD_UPDATED}_{self.entry.entry_id}", _on_board_updated
        )

    async def async_will_remove_from_hass(self) -> None:
        if self._unsub:
            self._unsub()
            self._unsub = None


class AirportBoardAirportSensor(_AirportBoardSensor):
    _attr_name = "Airport Board Airport"
    _attr_icon = "mdi:airport"

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry) -> None:
        super().__init__(hass, entry)
        self._attr_unique_id = f"{entry.entry_id}_airport"

    @property
    def native_value(self) -> str | None:
        airport = self.board.airport
        return airport.get("iata_code") if airport else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        board = self.board
        lt = board.location_time
        return {
            "airport": board.airport,
            "timezone": lt.timezone_name if lt else None,
            "tz_short": lt.tz_short if lt else None,
            "gmt_offset": lt.gmt_offset if lt else None,
            "local_time": lt.full_time if lt else None,
            "updated_at": board.updated_at.isoformat() if board.updated_at else None,
            "error": board.error,
        }


class AirportBoardFlightsSensor(_AirportBoardSensor):
    """Arrivals or departures board; state is the flight count."""

    _attr_native_unit_of_measurement = "flights"

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry, side: str) -> None:
        super().__init__(hass, entry)
        self.side = side
        self._attr_name = f"Airport Board {side.capitalize()}s"
        self._attr_icon = "mdi:airplane-landing" if side == "arrival" else "mdi:airplane-takeoff"
        self._attr_unique_id = f"{entry.entry_id}_{side}s"

    def _flights(self) -> list[dict[str, Any]]:
        board = self.board
        return board.arrivals if self.side == "arrival" else board.departures

    @property
    def native_value(self) -> int:
        return len(self._flights())

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        board = self.board
        summary = board.arrivals_summary if self.side == "arrival" else board.departures_summary
        return {
            "airport": (board.airport or {}).get("iata_code"),
            "summary": summary,
            "status_options": summary.get("status_options", []),
            "flights": self._flights(),
        }


class AirportBoardWeatherSensor(_AirportBoardSensor):
    _attr_name = "Airport Board Weather"
    _attr_icon = "mdi:weather-partly-cloudy"
    _attr_native_unit_of_measurement = UnitOfTemperature.CELSIUS

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry) -> None:
        super().__init__(hass, entry)
        self._attr_unique_id = f"{entry.entry_id}_weather"

    @property
    def native_value(self) -> float | None:
        weather = self.board.weather
        return weather.get("temperature") if weather else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return dict(self.board.weather or {})
