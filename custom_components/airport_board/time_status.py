"""Bucket scheduled times relative to now for board filtering and sorting.

Codes run 0..9 in chronological order. Past buckets count down from 4
as the flight gets older; future buckets count up from 5. Codes 0 and 9
are open-ended.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from enum import IntEnum
from typing import Any

from .air_time import parse_local_timestamp

DISPLAY_MARGIN_MINUTES = 10


class TimeStatus(IntEnum):
    PREVIOUS = 0
    PAST_12_15 = 1
    PAST_6_12 = 2
    PAST_3_6 = 3
    PAST_0_3 = 4
    AHEAD_0_3 = 5
    AHEAD_3_6 = 6
    AHEAD_6_12 = 7
    AHEAD_12_15 = 8
    RECENT = 9

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def code(self) -> int:
        return int(self)


_LABELS: dict[TimeStatus, str] = {
    TimeStatus.PREVIOUS: "Previous",
    TimeStatus.PAST_12_15: "12-15 hours ago",
    TimeStatus.PAST_6_12: "6-12 hours ago",
    TimeStatus.PAST_3_6: "3-6 hours ago",
    TimeStatus.PAST_0_3: "0-3 hours ago",
    TimeStatus.AHEAD_0_3: "0-3 hours ahead",
    TimeStatus.AHEAD_3_6: "3-6 hours ahead",
    TimeStatus.AHEAD_6_12: "6-12 hours ahead",
    TimeStatus.AHEAD_12_15: "12-15 hours ahead",
    TimeStatus.RECENT: "Recent",
}

# (upper bound in minutes, status), checked in order
_PAST_BUCKETS: tuple[tuple[int, TimeStatus], ...] = (
    (180, TimeStatus.PAST_0_3),
    (360, TimeStatus.PAST_3_6),
    (600, TimeStatus.PAST_6_12),
    (900, TimeStatus.PAST_12_15),
)
_FUTURE_BUCKETS: tuple[tuple[int, TimeStatus], ...] = (
    (180, TimeStatus.AHEAD_0_3),
    (360, TimeStatus.AHEAD_3_6),
    (600, TimeStatus.AHEAD_6_12),
    (900, TimeStatus.AHEAD_12_15),
)


def minutes_from_now(
    scheduled: Any,
    delay_minutes: float | None,
    now: datetime,
    margin_minutes: float = DISPLAY_MARGIN_MINUTES,
) -> float:
    """Signed minutes from now to scheduled + delay + margin (future positive)."""
    sched = parse_local_timestamp(scheduled)
    if sched.tzinfo is None and now.tzinfo is not None:
        sched = sched.replace(tzinfo=now.tzinfo)
    elif sched.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=sched.tzinfo)
    adjusted = sched + timedelta(minutes=(delay_minutes or 0) + margin_minutes)
    return (adjusted - now).total_seconds() / 60.0


def classify_time_status(
    scheduled: Any,
    delay_minutes: float | None,
    now: datetime,
    margin_minutes: float = DISPLAY_MARGIN_MINUTES,
) -> TimeStatus:
    diff = minutes_from_now(scheduled, delay_minutes, now, margin_minutes)
    if diff < 0:
        past = abs(diff)
        for bound, status in _PAST_BUCKETS:
            if past <= bound:
                return status
        return TimeStatus.PREVIOUS
    for bound, status in _FUTURE_BUCKETS:
        if diff <= bound:
            return status
    return TimeStatus.RECENT

