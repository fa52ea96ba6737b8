"""OpenWeatherMap current-conditions provider."""
from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any
from zoneinfo import ZoneInfo

import aiohttp
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession

_LOGGER = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
ICON_URL = "https://openweathermap.org/img/wn/{icon}@4x.png"


def _local(ts: Any, tz_name: str | None) -> datetime | None:
    if not isinstance(ts, (int, float)):
        return None
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    if tz_name:
        dt = dt.astimezone(ZoneInfo(tz_name))
    return dt


def format_weather(payload: dict[str, Any], tz_name: str | None = None) -> dict[str, Any]:
    """Shape an OpenWeatherMap response for display.

    Sunrise/sunset are rendered in `tz_name` (the airport's zone) when given.
    """
    main = payload.get("main") or {}
    wind = payload.get("wind") or {}
    sys_ = payload.get("sys") or {}
    weather = (payload.get("weather") or [{}])[0] or {}

    sunrise = _local(sys_.get("sunrise"), tz_name)
    sunset = _local(sys_.get("sunset"), tz_name)
    visibility = payload.get("visibility")
    temp = main.get("temp")

    return {
        "temperature": temp,
        "temperature_display": f"{temp:.1f}°C" if isinstance(temp, (int, float)) else None,
        "temperature_max": main.get("temp_max"),
        "temperature_min": main.get("temp_min"),
        "pressure_hpa": main.get("pressure"),
        "humidity_pct": main.get("humidity"),
        "sunrise": sunrise.strftime("%H:%M") if sunrise else None,
        "sunset": sunset.strftime("%H:%M") if sunset else None,
        "sunrise_full": sunrise.isoformat() if sunrise else None,
        "sunset_full": sunset.isoformat() if sunset else None,
        "wind_speed_ms": wind.get("speed"),
        "wind_direction_deg": wind.get("deg"),
        "description": weather.get("description"),
        "icon_url": ICON_URL.format(icon=weather["icon"]) if weather.get("icon") else None,
        "visibility_km": visibility / 1000 if isinstance(visibility, (int, float)) else None,
    }


class OpenWeatherProvider:
    def __init__(self, hass: HomeAssistant, api_key: str) -> None:
        self.hass = hass
        self.api_key = api_key.strip()

    async def async_get_weather(
        self, lat: float, lon: float, tz_name: str | None = None
    ) -> dict[str, Any] | None:
        """Fetch current conditions in metric units. Returns None on failure."""
        if not self.api_key:
            _LOGGER.error("OpenWeather API key is missing")
            return None

        params = {"lat": lat, "lon": lon, "units": "metric", "appid": self.api_key}
        session = async_get_clientsession(self.hass)
        try:
            async with session.get(
                OPENWEATHER_URL, params=params, timeout=aiohttp.ClientTimeout(total=25)
            ) as resp:
                if resp.status != 200:
                    _LOGGER.warning("OpenWeather request failed: HTTP %s", resp.status)
                    return None
                payload = await resp.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError, ValueError) as err:
            _LOGGER.warning("Error fetching weather data: %s", err)
            return None

        if not isinstance(payload, dict):
            return None
        return format_weather(payload, tz_name)
