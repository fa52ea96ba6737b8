"""Air time between two airports whose schedules use local wall-clock time.

Timetables give departure time in the origin's civil time and arrival
time in the destination's. Each is anchored to the zone found at its own
airport's coordinates, then both are compared as UTC instants.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import math
from typing import Any
from zoneinfo import ZoneInfo

from homeassistant.util import dt as dt_util

from .errors import TimestampParseError
from .tz_resolver import TimezoneResolver


@dataclass(frozen=True)
class AirTime:
    departure_zone: str
    arrival_zone: str
    hours: int
    minutes: int

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes


def parse_local_timestamp(val: Any) -> datetime:
    """Parse an ISO-8601 civil timestamp, raising TimestampParseError."""
    if isinstance(val, datetime):
        return val
    if not isinstance(val, str) or not val.strip():
        raise TimestampParseError(f"Missing or non-string timestamp: {val!r}")
    text = val.strip()
    try:
        dt = dt_util.parse_datetime(text)
    except ValueError:
        dt = None
    if dt is not None:
        return dt
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as err:
        raise TimestampParseError(f"Malformed timestamp: {val!r}") from err


def local_to_utc(val: Any, zone: str) -> datetime:
    """Read a wall-clock timestamp in `zone` and return the UTC instant.

    Ambiguous wall times (DST fall-back) resolve to the earlier offset.
    """
    dt = parse_local_timestamp(val)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=ZoneInfo(zone))
    return dt.astimezone(timezone.utc)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_air_time(
    dep_time: Any,
    dep_lat: float,
    dep_lon: float,
    arr_time: Any,
    arr_lat: float,
    arr_lon: float,
    resolver: TimezoneResolver,
) -> AirTime:
    """Return elapsed time from departure to arrival.

    Negative results (arrival before departure) are passed through.
    """
    dep_zone = resolver.resolve(dep_lat, dep_lon)
    arr_zone = resolver.resolve(arr_lat, arr_lon)

    dep_utc = local_to_utc(dep_time, dep_zone)
    arr_utc = local_to_utc(arr_time, arr_zone)

    total = round_half_up((arr_utc - dep_utc).total_seconds() / 60.0)
    hours, minutes = divmod(total, 60)
    return AirTime(
        departure_zone=dep_zone,
        arrival_zone=arr_zone,
        hours=hours,
        minutes=minutes,
    )
