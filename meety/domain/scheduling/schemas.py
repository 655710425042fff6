"""Scheduling domain schemas - wire formats (HH:MM, YYYY-MM-DD) for availability and bookings"""

from datetime import date, datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from ...exceptions import MeetyError
from .availability import WEEKDAYS, TimeWindow, WeekdayAvailability, WeeklyAvailability
from .status import is_elapsed, needs_decision
from .time_calculator import format_time, parse_date, parse_time


def _parse_time_field(value: str) -> int:
    try:
        return parse_time(value)
    except MeetyError as e:
        raise ValueError(e.message) from e


class TimeWindowSchema(BaseModel):
    """Availability window as HH:MM strings"""

    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def validate_hhmm(cls, v):
        _parse_time_field(v)
        return v.strip()

    def to_domain(self) -> TimeWindow:
        start = parse_time(self.start)
        end = parse_time(self.end)
        if start >= end:
            raise ValueError(f"Window start {self.start} must be before end {self.end}")
        return TimeWindow(start=start, end=end)

    @classmethod
    def from_domain(cls, window: TimeWindow) -> "TimeWindowSchema":
        return cls(start=format_time(window.start), end=format_time(window.end))


class DayAvailabilitySchema(BaseModel):
    enabled: bool = False
    # Older clients send `timeSlots`
    windows: list[TimeWindowSchema] = Field(
        default_factory=list, validation_alias=AliasChoices("windows", "timeSlots")
    )

    def to_domain(self) -> WeekdayAvailability:
        return WeekdayAvailability(
            enabled=self.enabled, windows=tuple(w.to_domain() for w in self.windows)
        )

    @classmethod
    def from_domain(cls, day: WeekdayAvailability) -> "DayAvailabilitySchema":
        return cls(
            enabled=day.enabled, windows=[TimeWindowSchema.from_domain(w) for w in day.windows]
        )


class AvailabilitySchema(BaseModel):
    """Weekly template keyed by weekday name; omitted days are disabled"""

    monday: DayAvailabilitySchema = Field(default_factory=DayAvailabilitySchema)
    tuesday: DayAvailabilitySchema = Field(default_factory=DayAvailabilitySchema)
    wednesday: DayAvailabilitySchema = Field(default_factory=DayAvailabilitySchema)
    thursday: DayAvailabilitySchema = Field(default_factory=DayAvailabilitySchema)
    friday: DayAvailabilitySchema = Field(default_factory=DayAvailabilitySchema)
    saturday: DayAvailabilitySchema = Field(default_factory=DayAvailabilitySchema)
    sunday: DayAvailabilitySchema = Field(default_factory=DayAvailabilitySchema)

    @field_validator(*WEEKDAYS)
    @classmethod
    def validate_windows(cls, v):
        # Surface start >= end as a field error rather than at conversion time
        for window in v.windows:
            window.to_domain()
        return v

    def to_domain(self) -> WeeklyAvailability:
        return WeeklyAvailability(**{name: getattr(self, name).to_domain() for name in WEEKDAYS})

    @classmethod
    def from_domain(cls, availability: WeeklyAvailability) -> "AvailabilitySchema":
        return cls(
            **{
                name: DayAvailabilitySchema.from_domain(availability.for_weekday(index))
                for index, name in enumerate(WEEKDAYS)
            }
        )


class BookingRequest(BaseModel):
    """Public booking request"""

    date: str
    time: str
    participant_id: int = Field(validation_alias=AliasChoices("participant_id", "participant"))

    def slot(self) -> tuple[date, int]:
        """Parsed (date, minutes) - raises ValidationError on malformed input"""
        return parse_date(self.date), parse_time(self.time)


class RescheduleRequest(BaseModel):
    date: str
    time: str

    def slot(self) -> tuple[date, int]:
        return parse_date(self.date), parse_time(self.time)


class StatusUpdateRequest(BaseModel):
    status: str


class SlotsResponse(BaseModel):
    date: date
    duration: int
    slots: list[str]


class AvailableDatesResponse(BaseModel):
    start: date
    days: int
    dates: list[date]


class BookingParticipant(BaseModel):
    id: int
    full_name: str
    email: str
    phone: str

    class Config:
        from_attributes = True


class BookedSlotResponse(BaseModel):
    id: str
    meeting_id: int
    date: date
    time: str
    status: str
    participant: Optional[BookingParticipant] = None
    is_elapsed: bool = False
    needs_decision: bool = False
    status_changed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_booking(cls, booking, now: datetime) -> "BookedSlotResponse":
        """Read view of a booking, with elapsed-pending derived against `now`"""
        return cls(
            id=booking.public_id,
            meeting_id=booking.meeting_id,
            date=booking.slot_date,
            time=format_time(booking.slot_time),
            status=booking.status,
            participant=(
                BookingParticipant.model_validate(booking.participant)
                if booking.participant is not None
                else None
            ),
            is_elapsed=is_elapsed(booking.slot_date, booking.slot_time, now),
            needs_decision=needs_decision(
                booking.status, booking.slot_date, booking.slot_time, now
            ),
            status_changed_at=booking.status_changed_at,
            created_at=booking.created_at,
        )


class BookingConfirmation(BaseModel):
    message: str
    booking: BookedSlotResponse


class ReconcileResponse(BaseModel):
    meeting_id: int
    completed: int
    booking_ids: list[str]
