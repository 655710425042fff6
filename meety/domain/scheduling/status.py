"""
Booking status transitions

Booking statuses: pending -> completed / missed / cancelled
- pending is only entered at creation
- completed <-> missed may be toggled by the host at any time (manual correction)
- cancelled is terminal and frees the (date, time) for rebooking

Elapsed pending bookings are not flipped by a background process. They are
presented as needing a decision on read, and `reconcile` settles them on demand.
"""

from datetime import datetime
from enum import Enum

from ...exceptions import ValidationError
from .time_calculator import slot_instant


class BookingStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    MISSED = "missed"
    CANCELLED = "cancelled"


# Statuses that hold the slot for uniqueness purposes
LIVE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.COMPLETED, BookingStatus.MISSED})

# Targets a host may request
REQUESTABLE_STATUSES = frozenset(
    {BookingStatus.COMPLETED, BookingStatus.MISSED, BookingStatus.CANCELLED}
)

VALID_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.COMPLETED, BookingStatus.MISSED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: {BookingStatus.MISSED},
    BookingStatus.MISSED: {BookingStatus.COMPLETED},
    BookingStatus.CANCELLED: set(),  # Terminal state
}


def parse_requested_status(value: str) -> BookingStatus:
    """
    Turn a requested status string into a BookingStatus.

    Raises:
        ValidationError: If the value is not completed, missed or cancelled
    """
    try:
        status = BookingStatus(str(value).strip().lower())
    except ValueError as e:
        raise ValidationError(
            f"Invalid status {value!r}",
            details={"allowed": sorted(s.value for s in REQUESTABLE_STATUSES)},
        ) from e

    if status not in REQUESTABLE_STATUSES:
        raise ValidationError(
            f"Status {status.value!r} cannot be requested",
            details={"allowed": sorted(s.value for s in REQUESTABLE_STATUSES)},
        )
    return status


def validate_status_transition(current: BookingStatus, new: BookingStatus) -> bool:
    """
    Check whether a booking may move from `current` to `new`.

    Requesting the current status is allowed and is a no-op.
    """
    if current == new:
        return True
    return new in VALID_TRANSITIONS.get(current, set())


def initial_status(slot_date, slot_time: int, now: datetime) -> BookingStatus:
    """Status at creation: completed when the slot instant is already at or before now"""
    if slot_instant(slot_date, slot_time) <= now:
        return BookingStatus.COMPLETED
    return BookingStatus.PENDING


def is_elapsed(slot_date, slot_time: int, now: datetime) -> bool:
    return slot_instant(slot_date, slot_time) <= now


def needs_decision(status: str, slot_date, slot_time: int, now: datetime) -> bool:
    """A pending booking whose time has passed is waiting for the host to settle it"""
    return status == BookingStatus.PENDING.value and is_elapsed(slot_date, slot_time, now)
