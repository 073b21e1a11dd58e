"""Opening-hours checks for Google Places style data.

Days follow the Sunday = 0 convention of the periods payload. ``weekday_text``
is Monday-first, so day indexes are shifted when falling back to it.
"""
from __future__ import annotations

import re
from datetime import datetime

from ..recommendations.models import OpeningHours, OpeningPeriod

MINUTES_PER_DAY = 24 * 60

_RANGE_RE = re.compile(
    r"(\d{1,2}):?(\d{2})?\s*(AM|PM|am|pm)?\s*[–—-]\s*(\d{1,2}):?(\d{2})?\s*(AM|PM|am|pm)?"
)

_CLOSED_MARKERS = ("closed", "סגור")
_ALL_DAY_MARKERS = ("24 hours", "24 שעות")


def parse_time_to_minutes(value: str | None) -> int:
    """Parse ``"1930"`` or ``"19:30"`` into minutes since midnight (0 if unparseable)."""
    if not value:
        return 0
    try:
        if len(value) == 4 and ":" not in value:
            return int(value[:2]) * 60 + int(value[2:])
        parts = value.split(":")
        if len(parts) == 2:
            return int(parts[0]) * 60 + int(parts[1])
    except ValueError:
        return 0
    return 0


def _open_from_periods(periods: list[OpeningPeriod], day: int, minutes: int) -> bool:
    for period in periods:
        if period.open.day != day:
            continue
        open_at = parse_time_to_minutes(period.open.time)
        if period.close is None:
            return True
        if period.close.day != period.open.day:
            if minutes >= open_at:
                return True
        elif open_at <= minutes <= parse_time_to_minutes(period.close.time):
            return True

    # Overnight period that started the day before
    previous_day = (day + 6) % 7
    for period in periods:
        if period.open.day != previous_day or period.close is None:
            continue
        if period.close.day == day and minutes <= parse_time_to_minutes(period.close.time):
            return True

    return False


def _to_24h(hour: int, meridiem: str | None) -> int:
    if meridiem == "PM" and hour != 12:
        return hour + 12
    if meridiem == "AM" and hour == 12:
        return 0
    return hour


def _open_from_weekday_text(weekday_text: list[str], day: int, minutes: int) -> bool:
    google_index = 6 if day == 0 else day - 1
    if google_index >= len(weekday_text):
        return True

    text = weekday_text[google_index]
    lower = text.lower()
    if any(marker in lower for marker in _CLOSED_MARKERS):
        return False
    if any(marker in lower for marker in _ALL_DAY_MARKERS):
        return True

    match = _RANGE_RE.search(text)
    if not match:
        return True

    open_meridiem = match.group(3).upper() if match.group(3) else None
    close_meridiem = match.group(6).upper() if match.group(6) else None
    open_at = _to_24h(int(match.group(1)), open_meridiem) * 60 + int(match.group(2) or 0)
    close_at = _to_24h(int(match.group(4)), close_meridiem) * 60 + int(match.group(5) or 0)

    if close_at < open_at:
        close_at += MINUTES_PER_DAY
        if minutes < open_at:
            return minutes + MINUTES_PER_DAY <= close_at

    return open_at <= minutes <= close_at


def is_open_at(opening_hours: OpeningHours | None, day: int, minutes: int) -> bool:
    """Return whether the restaurant is open on ``day`` at ``minutes`` past midnight.

    Missing or unparseable data counts as open.
    """
    if opening_hours is None:
        return True
    if opening_hours.periods:
        return _open_from_periods(opening_hours.periods, day, minutes)
    if opening_hours.weekday_text:
        return _open_from_weekday_text(opening_hours.weekday_text, day, minutes)
    return True


def time_window(
    timing: str,
    specific_time: str | None = None,
    now: datetime | None = None,
) -> tuple[int, int]:
    """Return the (start, end) minutes window implied by a timing preference."""
    if specific_time:
        start = parse_time_to_minutes(specific_time)
        return start, start + 120

    if timing == "now":
        now = now or datetime.now()
        start = now.hour * 60 + now.minute
        return start, start + 60
    if timing == "tonight":
        return 18 * 60, 23 * 60
    if timing in ("tomorrow", "weekend"):
        return 12 * 60, 23 * 60
    return 0, MINUTES_PER_DAY
