"""Coordinate to IANA time zone lookup.

The zone polygons come from timezonefinder's bundled dataset. The finder
is expensive to build (it maps the dataset files), so one resolver is
constructed per config entry and shared read-only by every lookup.
"""
from __future__ import annotations

import logging
import math

from timezonefinder import TimezoneFinder

from .errors import InvalidCoordinateError, ZoneLookupMiss

_LOGGER = logging.getLogger(__name__)


def _validate(lat: float, lon: float) -> tuple[float, float]:
    try:
        lat_f = float(lat)
        lon_f = float(lon)
    except (TypeError, ValueError) as err:
        raise InvalidCoordinateError(f"Invalid coordinate ({lat!r}, {lon!r})") from err
    if not (math.isfinite(lat_f) and math.isfinite(lon_f)):
        raise InvalidCoordinateError(f"Non-finite coordinate ({lat!r}, {lon!r})")
    if not -90.0 <= lat_f <= 90.0 or not -180.0 <= lon_f <= 180.0:
        raise InvalidCoordinateError(f"Coordinate out of range ({lat_f}, {lon_f})")
    return lat_f, lon_f


def fixed_offset_zone(lon: float) -> str:
    """Return the nautical Etc/GMT zone for a longitude.

    Etc zones use POSIX signs: UTC+8 is "Etc/GMT-8".
    """
    hours = int(math.floor(float(lon) / 15.0 + 0.5))
    hours = max(-12, min(12, hours))
    if hours == 0:
        return "Etc/GMT"
    return f"Etc/GMT{'-' if hours > 0 else '+'}{abs(hours)}"


class TimezoneResolver:
    """Resolve (lat, lon) pairs to IANA zone names."""

    def __init__(self, finder: TimezoneFinder | None = None) -> None:
        self._finder = finder if finder is not None else TimezoneFinder()

    def lookup(self, lat: float, lon: float) -> str:
        """Return the dataset zone, raising ZoneLookupMiss when there is none."""
        lat_f, lon_f = _validate(lat, lon)
        try:
            zone = self._finder.timezone_at(lng=lon_f, lat=lat_f)
        except ValueError as err:
            raise InvalidCoordinateError(str(err)) from err
        if not zone:
            raise ZoneLookupMiss(f"No time zone at ({lat_f}, {lon_f})")
        return zone

    def resolve(self, lat: float, lon: float) -> str:
        """Return a zone for the coordinate, never failing on a lookup miss."""
        try:
            return self.lookup(lat, lon)
        except ZoneLookupMiss:
            zone = fixed_offset_zone(lon)
            _LOGGER.debug("No zone at (%s, %s), using %s", lat, lon, zone)
            return zone
