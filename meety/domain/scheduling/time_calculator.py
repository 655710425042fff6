"""Wall-clock helpers: HH:MM <-> minutes since midnight, dates and "now" """

import re
from datetime import date, datetime, timedelta
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ...exceptions import ValidationError

MINUTES_PER_DAY = 24 * 60

# 0:00 - 23:59, plus 24:00 as the end-of-day boundary
_HHMM_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$|^24:00$")

Clock = Callable[[], datetime]


def parse_time(value: str) -> int:
    """
    Parse an HH:MM string into minutes since midnight.

    Raises:
        ValidationError: If the value is not a valid time of day
    """
    if not isinstance(value, str) or not _HHMM_PATTERN.match(value.strip()):
        raise ValidationError(f"{value!r} is not a valid time format (HH:MM)")

    hours, minutes = value.strip().split(":")
    return int(hours) * 60 + int(minutes)


def format_time(minutes: int) -> str:
    """Render minutes since midnight as zero-padded HH:MM"""
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise ValidationError(f"{minutes} is outside a single day")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD calendar date"""
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError) as e:
        raise ValidationError(f"{value!r} is not a valid date (YYYY-MM-DD)") from e


def minute_of_day(moment: datetime) -> int:
    """Whole minutes elapsed since midnight (seconds are truncated)"""
    return moment.hour * 60 + moment.minute


def slot_instant(slot_date: date, slot_time: int) -> datetime:
    """Naive wall-clock datetime at which a slot starts"""
    return datetime.combine(slot_date, datetime.min.time()) + timedelta(minutes=slot_time)


def range_end(start: date, days: int) -> date:
    """Last date of [start, start + days), clamped to the end of the calendar"""
    if days - 1 > (date.max - start).days:
        return date.max
    return start + timedelta(days=days - 1)


def make_clock(timezone_name: Optional[str] = None) -> Clock:
    """
    Build the engine's notion of "now".

    All scheduling arithmetic runs on naive host-local wall-clock values, so an
    aware "now" in the configured zone is stripped of its tzinfo.
    """
    if not timezone_name:
        return datetime.now

    zone = ZoneInfo(timezone_name)

    def now() -> datetime:
        return datetime.now(zone).replace(tzinfo=None)

    return now
