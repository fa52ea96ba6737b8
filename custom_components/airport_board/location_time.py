"""Civil time at a target location, seen from the device's location.

The board compares timetable entries (airport wall-clock time) against
"now" at the airport, so the device clock has to be moved into the
airport's zone first.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import logging
from zoneinfo import ZoneInfo

from homeassistant.util import dt as dt_util

from .air_time import parse_local_timestamp
from .tz_resolver import TimezoneResolver

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationTime:
    timezone_name: str
    gmt_offset: int  # seconds east of UTC
    full_time: str  # "YYYY-MM-DD HH:MM:SS"
    tz_short: str | None
    local: datetime


def tz_short_name(tz_name: str | None, when: datetime | None = None) -> str | None:
    """Return a short TZ label like 'CET', 'IST', '-03', '+05:30'.

    Uses 'when' so DST is correct. Returns None if unknown.
    """
    if not tz_name:
        return None
    try:
        tz = ZoneInfo(tz_name)
    except (ValueError, KeyError):
        return None

    dt = when or dt_util.utcnow()
    local = dt.astimezone(tz) if dt.tzinfo else dt.replace(tzinfo=tz)

    abbr = local.tzname()
    if abbr:
        return abbr

    off = local.utcoffset()
    if off is None:
        return None
    total_min = int(off.total_seconds() // 60)
    sign = "+" if total_min >= 0 else "-"
    total_min = abs(total_min)
    return f"{sign}{total_min // 60:02d}:{total_min % 60:02d}"


def location_time_info(
    target_lat: float,
    target_lon: float,
    when: datetime | str | None,
    resolver: TimezoneResolver,
    current_lat: float | None = None,
    current_lon: float | None = None,
) -> LocationTime | None:
    """Return zone, UTC offset and wall-clock time at the target location.

    A naive `when` is read in the current location's zone (or UTC when no
    current location is given). Returns None when the lookup fails.
    """
    try:
        timezone_name = resolver.resolve(target_lat, target_lon)
        moment = parse_local_timestamp(when) if when is not None else dt_util.utcnow()
        if moment.tzinfo is None:
            if current_lat is not None and current_lon is not None:
                current_tz = ZoneInfo(resolver.resolve(current_lat, current_lon))
            else:
                current_tz = dt_util.UTC
            moment = moment.replace(tzinfo=current_tz)
        target_time = moment.astimezone(ZoneInfo(timezone_name))
    except (ValueError, KeyError) as err:
        _LOGGER.warning("Error getting location time info: %s", err)
        return None

    offset = target_time.utcoffset()
    return LocationTime(
        timezone_name=timezone_name,
        gmt_offset=int(offset.total_seconds()) if offset is not None else 0,
        full_time=target_time.strftime("%Y-%m-%d %H:%M:%S"),
        tz_short=tz_short_name(timezone_name, target_time),
        local=target_time,
    )
