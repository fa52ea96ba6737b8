"""Tests for the ten-bucket time status classifier."""
from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from custom_components.airport_board.errors import TimestampParseError
from custom_components.airport_board.time_status import (
    DISPLAY_MARGIN_MINUTES,
    TimeStatus,
    classify_time_status,
    minutes_from_now,
)

NOW = datetime(2025, 8, 25, 12, 0)


def _at(minutes_from_now: float) -> str:
    """Scheduled time whose margin-adjusted distance from NOW is `minutes_from_now`."""
    return (NOW + timedelta(minutes=minutes_from_now - DISPLAY_MARGIN_MINUTES)).isoformat()


def test_labels_in_code_order():
    assert [s.label for s in sorted(TimeStatus)] == [
        "Previous",
        "12-15 hours ago",
        "6-12 hours ago",
        "3-6 hours ago",
        "0-3 hours ago",
        "0-3 hours ahead",
        "3-6 hours ahead",
        "6-12 hours ahead",
        "12-15 hours ahead",
        "Recent",
    ]
    assert [s.code for s in sorted(TimeStatus)] == list(range(10))


def test_four_hours_ago_is_three_to_six():
    status = classify_time_status((NOW - timedelta(hours=4)).isoformat(), 0, NOW)
    assert status is TimeStatus.PAST_3_6
    assert (status.label, status.code) == ("3-6 hours ago", 3)


@pytest.mark.parametrize(
    ("diff", "code"),
    [
        (-2000, 0),
        (-901, 0),
        (-900, 1),
        (-601, 1),
        (-600, 2),
        (-361, 2),
        (-360, 3),
        (-181, 3),
        (-180, 4),
        (-1, 4),
        (-0.5, 4),
        (0, 5),
        (180, 5),
        (181, 6),
        (360, 6),
        (361, 7),
        (600, 7),
        (601, 8),
        (900, 8),
        (901, 9),
        (5000, 9),
    ],
)
def test_boundary_table(diff, code):
    assert classify_time_status(_at(diff), None, NOW).code == code


def test_codes_never_decrease_as_schedule_moves_later():
    codes = [
        classify_time_status((NOW + timedelta(minutes=m)).isoformat(), 0, NOW).code
        for m in range(-20 * 60, 20 * 60, 5)
    ]
    assert codes == sorted(codes)
    assert set(codes) == set(range(10))


def test_delay_moves_flight_later():
    assert classify_time_status("2025-08-25T12:00", None, NOW) is TimeStatus.AHEAD_0_3
    assert classify_time_status("2025-08-25T12:00", 200, NOW) is TimeStatus.AHEAD_3_6


def test_margin_is_overridable():
    sched = (NOW - timedelta(minutes=5)).isoformat()
    assert classify_time_status(sched, 0, NOW) is TimeStatus.AHEAD_0_3
    assert classify_time_status(sched, 0, NOW, margin_minutes=0) is TimeStatus.PAST_0_3
    assert minutes_from_now(sched, 0, NOW, margin_minutes=0) == -5


def test_naive_schedule_read_in_aware_now_zone():
    now = datetime(2025, 8, 25, 12, 0, tzinfo=ZoneInfo("America/New_York"))
    assert minutes_from_now("2025-08-25T13:00", 0, now) == 70


def test_aware_schedule_compared_as_instant():
    now = datetime(2025, 8, 25, 12, 0, tzinfo=ZoneInfo("America/New_York"))
    # 16:00Z == 12:00 EDT
    assert minutes_from_now("2025-08-25T16:00:00+00:00", 0, now) == DISPLAY_MARGIN_MINUTES


def test_malformed_schedule_raises():
    with pytest.raises(TimestampParseError):
        classify_time_status("tomorrow-ish", 0, NOW)
