"""
Availability Resolver

The single implementation of "which slots are still bookable on a date". It is
used to show available times and to re-validate every booking at commit time.

Algorithm (per date):
    1. Dates before today (host-local) have nothing available
    2. Disabled weekdays, or weekdays without windows, have nothing available
    3. Generate slots over every window, union and sort
    4. Occupied = booked times for the date whose status is not cancelled
    5. Today only: drop starts that are not strictly after the current minute
    6. Available = generated - occupied - elapsed, ascending
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .availability import WeeklyAvailability
from .slots import generate_for_windows
from .time_calculator import minute_of_day, range_end


class Unavailability(str, Enum):
    """Why a whole date has no candidate slots"""

    PAST_DATE = "past_date"
    NOT_ACCEPTING = "not_accepting_bookings"
    DAY_DISABLED = "day_disabled"


class DayResolution(BaseModel):
    """Breakdown of one date's slots; `available` is what callers may book"""

    model_config = ConfigDict(frozen=True)

    on_date: date
    candidates: tuple[int, ...] = ()
    occupied: frozenset[int] = frozenset()
    elapsed: frozenset[int] = frozenset()
    available: tuple[int, ...] = ()
    reason: Optional[Unavailability] = None

    def is_candidate(self, slot_time: int) -> bool:
        return slot_time in self.candidates

    def is_available(self, slot_time: int) -> bool:
        return slot_time in self.available


def resolve_day(
    availability: WeeklyAvailability,
    duration: int,
    on_date: date,
    booked_times: Iterable[int],
    now: datetime,
    accepting_bookings: bool = True,
) -> DayResolution:
    """
    Resolve the bookable slots of a single date.

    Args:
        availability: the meeting's weekly template
        duration: meeting duration in minutes
        on_date: calendar date being resolved
        booked_times: start times of this date's non-cancelled bookings
        now: host-local wall-clock "now"
        accepting_bookings: False for meetings that are not active

    Returns:
        DayResolution with candidates, occupied, elapsed and available slots
    """
    today = now.date()
    if on_date < today:
        return DayResolution(on_date=on_date, reason=Unavailability.PAST_DATE)

    if not accepting_bookings:
        return DayResolution(on_date=on_date, reason=Unavailability.NOT_ACCEPTING)

    day = availability.for_date(on_date)
    if not day.is_bookable:
        return DayResolution(on_date=on_date, reason=Unavailability.DAY_DISABLED)

    # Union and sort; overlapping windows are rejected on edit but stored data may predate that
    candidates = tuple(sorted(set(generate_for_windows(day.windows, duration))))

    occupied = frozenset(t for t in booked_times if t in candidates)

    elapsed: frozenset[int] = frozenset()
    if on_date == today:
        current_minute = minute_of_day(now)
        elapsed = frozenset(t for t in candidates if t <= current_minute)

    available = tuple(t for t in candidates if t not in occupied and t not in elapsed)

    return DayResolution(
        on_date=on_date,
        candidates=candidates,
        occupied=occupied,
        elapsed=elapsed,
        available=available,
    )


def available_slots(
    availability: WeeklyAvailability,
    duration: int,
    on_date: date,
    booked_times: Iterable[int],
    now: datetime,
    accepting_bookings: bool = True,
) -> list[int]:
    """Ascending start times still bookable on `on_date`"""
    resolution = resolve_day(
        availability, duration, on_date, booked_times, now, accepting_bookings
    )
    return list(resolution.available)


def available_dates(
    availability: WeeklyAvailability,
    duration: int,
    start: date,
    days: int,
    booked_by_date: Mapping[date, Iterable[int]],
    now: datetime,
    accepting_bookings: bool = True,
) -> list[date]:
    """Dates in [start, start + days) that still have at least one open slot"""
    if days < 1:
        return []

    result = []
    for offset in range((range_end(start, days) - start).days + 1):
        current = start + timedelta(days=offset)
        resolution = resolve_day(
            availability,
            duration,
            current,
            booked_by_date.get(current, ()),
            now,
            accepting_bookings,
        )
        if resolution.available:
            result.append(current)
    return result
