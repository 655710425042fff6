"""
Weekly availability model

Pure data: for each weekday whether it is bookable and the wall-clock windows
in which slots may start. Times are minutes since midnight; HH:MM parsing
happens at the schema boundary.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ...exceptions import ValidationError
from .time_calculator import MINUTES_PER_DAY, format_time

# Indexed by date.weekday() (Monday == 0)
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

DEFAULT_WINDOW_START = 9 * 60
DEFAULT_WINDOW_END = 17 * 60


class TimeWindow(BaseModel):
    """Half-open wall-clock window [start, end) in minutes since midnight"""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0, lt=MINUTES_PER_DAY)
    end: int = Field(gt=0, le=MINUTES_PER_DAY)

    @model_validator(mode="after")
    def check_order(self):
        if self.start >= self.end:
            raise ValueError(
                f"Window start {format_time(self.start)} must be before end {format_time(self.end)}"
            )
        return self

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "TimeWindow") -> bool:
        return self.start < other.end and other.start < self.end


class WeekdayAvailability(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    windows: tuple[TimeWindow, ...] = ()

    @property
    def is_bookable(self) -> bool:
        return self.enabled and bool(self.windows)

    def overlapping_windows(self) -> list[tuple[TimeWindow, TimeWindow]]:
        """Pairs of windows that share at least one minute"""
        ordered = sorted(self.windows, key=lambda w: (w.start, w.end))
        return [
            (first, second)
            for index, first in enumerate(ordered)
            for second in ordered[index + 1 :]
            if first.overlaps(second)
        ]


class WeeklyAvailability(BaseModel):
    """The 7-day recurring template of a meeting"""

    model_config = ConfigDict(frozen=True)

    monday: WeekdayAvailability = WeekdayAvailability()
    tuesday: WeekdayAvailability = WeekdayAvailability()
    wednesday: WeekdayAvailability = WeekdayAvailability()
    thursday: WeekdayAvailability = WeekdayAvailability()
    friday: WeekdayAvailability = WeekdayAvailability()
    saturday: WeekdayAvailability = WeekdayAvailability()
    sunday: WeekdayAvailability = WeekdayAvailability()

    @classmethod
    def default(cls) -> "WeeklyAvailability":
        window = TimeWindow(start=DEFAULT_WINDOW_START, end=DEFAULT_WINDOW_END)
        day = WeekdayAvailability(enabled=False, windows=(window,))
        return cls(**{name: day for name in WEEKDAYS})

    @classmethod
    def from_storage(cls, data: dict | None) -> "WeeklyAvailability":
        """Load the JSON column; missing weekdays fall back to disabled"""
        return cls.model_validate(data or {})

    def to_storage(self) -> dict:
        return self.model_dump(mode="json")

    def for_weekday(self, weekday: int) -> WeekdayAvailability:
        return getattr(self, WEEKDAYS[weekday])

    def for_date(self, on_date: date) -> WeekdayAvailability:
        return self.for_weekday(on_date.weekday())

    def ensure_no_overlaps(self) -> None:
        """
        Reject overlapping windows on enabled weekdays.

        Disabled weekdays may keep stale windows; they are never generated.

        Raises:
            ValidationError: naming the first offending weekday and windows
        """
        for name in WEEKDAYS:
            day = getattr(self, name)
            if not day.enabled:
                continue
            overlaps = day.overlapping_windows()
            if overlaps:
                first, second = overlaps[0]
                raise ValidationError(
                    f"Overlapping availability windows on {name}: "
                    f"{format_time(first.start)}-{format_time(first.end)} and "
                    f"{format_time(second.start)}-{format_time(second.end)}",
                    details={"weekday": name},
                )
