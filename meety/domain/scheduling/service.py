"""
Scheduling service - Availability resolution and the booking ledger

Every booking re-resolves the date against the meeting's current availability
and ledger before inserting. The insert itself is guarded by the partial unique
index on live (meeting_id, slot_date, slot_time), so concurrent attempts for the
same slot produce exactly one winner and ConflictError for everyone else.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...config import MAX_AVAILABLE_DATES_RANGE
from ...exceptions import ConflictError, NotFoundError, ValidationError
from ...models import BookedSlot, Meeting
from ...services.notification_service import (
    BookingCreated,
    BookingDeleted,
    BookingRescheduled,
    BookingStatusChanged,
    EventDispatcher,
)
from ..meetings.service import MeetingService
from ..participants.service import ParticipantService
from .availability import WeeklyAvailability
from .availability_service import DayResolution, available_dates, resolve_day
from .repository import BookingRepository
from .status import (
    BookingStatus,
    initial_status,
    is_elapsed,
    parse_requested_status,
    validate_status_transition,
)
from .time_calculator import Clock, format_time, range_end

logger = logging.getLogger(__name__)


class SchedulingService:
    """Service layer for availability and bookings"""

    def __init__(
        self,
        db: Session,
        dispatcher: Optional[EventDispatcher] = None,
        clock: Clock = datetime.now,
    ):
        self.db = db
        self.repo = BookingRepository()
        self.meetings = MeetingService(db)
        self.participants = ParticipantService(db)
        self.dispatcher = dispatcher or EventDispatcher()
        self.clock = clock

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def resolve(
        self,
        meeting: Meeting,
        on_date: date,
        now: Optional[datetime] = None,
        ignore: Optional[BookedSlot] = None,
    ) -> DayResolution:
        """
        Resolve one date of a meeting against its ledger

        `ignore` leaves a booking's own key out of the occupied set, which is
        how a booking can be rescheduled around itself.
        """
        now = now or self.clock()
        booked = self.repo.get_booked_times(self.db, meeting.id, on_date)
        if ignore is not None and ignore.slot_date == on_date and ignore.slot_time in booked:
            booked.remove(ignore.slot_time)

        return resolve_day(
            WeeklyAvailability.from_storage(meeting.availability),
            meeting.duration,
            on_date,
            booked,
            now,
            accepting_bookings=meeting.status == "active",
        )

    def available_slots(self, ref: str, on_date: date) -> tuple[Meeting, list[int]]:
        """Bookable start times of a public meeting on a date"""
        meeting = self.meetings.get_public_meeting(ref)
        return meeting, list(self.resolve(meeting, on_date).available)

    def available_dates(
        self, ref: str, start: Optional[date] = None, days: int = 31
    ) -> tuple[date, list[date]]:
        """Dates in [start, start + days) with at least one bookable slot"""
        if days < 1 or days > MAX_AVAILABLE_DATES_RANGE:
            raise ValidationError(
                f"days must be between 1 and {MAX_AVAILABLE_DATES_RANGE}",
                {"days": days},
            )

        meeting = self.meetings.get_public_meeting(ref)
        now = self.clock()
        start = start or now.date()
        booked = self.repo.get_booked_times_between(
            self.db, meeting.id, start, range_end(start, days)
        )
        dates = available_dates(
            WeeklyAvailability.from_storage(meeting.availability),
            meeting.duration,
            start,
            days,
            booked,
            now,
            accepting_bookings=meeting.status == "active",
        )
        return start, dates

    @staticmethod
    def _ensure_bookable(resolution: DayResolution, slot_time: int) -> None:
        """Translate an unavailable time into ValidationError or ConflictError"""
        if resolution.is_available(slot_time):
            return

        details = {"date": resolution.on_date.isoformat(), "time": format_time(slot_time)}
        if resolution.reason is not None:
            details["reason"] = resolution.reason.value
            raise ValidationError("Date is not available for booking", details)
        if not resolution.is_candidate(slot_time):
            raise ValidationError("Time is not a valid slot for this meeting", details)
        if slot_time in resolution.occupied:
            raise ConflictError("Slot is already booked", details)
        raise ConflictError("Slot has already started", details)

    # ------------------------------------------------------------------
    # Booking ledger
    # ------------------------------------------------------------------

    def book(self, ref: str, slot_date: date, slot_time: int, participant_id: int) -> BookedSlot:
        """
        Book a slot of a public meeting

        Checked in order: (a) the time is currently available, (b) the
        participant resolves. Nothing is written unless both pass.
        """
        meeting = self.meetings.get_public_meeting(ref)
        now = self.clock()
        logger.info(
            f"📅 Booking meeting {meeting.id} on {slot_date} at {format_time(slot_time)} "
            f"for participant {participant_id}"
        )

        resolution = self.resolve(meeting, slot_date, now=now)
        self._ensure_bookable(resolution, slot_time)

        participant = self.participants.get_active_participant(participant_id)

        booking = BookedSlot(
            meeting_id=meeting.id,
            participant_id=participant.id,
            slot_date=slot_date,
            slot_time=slot_time,
            status=initial_status(slot_date, slot_time, now).value,
            status_changed_at=now,
        )
        participant.last_meeting_at = now

        try:
            booking = self.repo.add_booking(self.db, booking)
        except IntegrityError as e:
            logger.warning(
                f"⚠️ Lost booking race for meeting {meeting.id} "
                f"{slot_date} {format_time(slot_time)}"
            )
            raise ConflictError(
                "Slot is already booked",
                {"date": slot_date.isoformat(), "time": format_time(slot_time)},
            ) from e

        logger.info(f"✅ Booking {booking.public_id} created ({booking.status})")
        self.dispatcher.publish(
            BookingCreated(**self._event_fields(meeting, booking), status=booking.status)
        )
        return booking

    def _get_booking(self, meeting: Meeting, booking_id: str) -> BookedSlot:
        booking = self.repo.get_booking(self.db, meeting.id, booking_id)
        if not booking:
            raise NotFoundError("Booked slot not found", {"booking_id": booking_id})
        return booking

    def list_bookings(
        self,
        meeting_id: int,
        host_id: str,
        on_date: Optional[date] = None,
        upcoming: bool = False,
    ) -> list[BookedSlot]:
        """Bookings of a host's meeting, optionally for one date or from today on"""
        meeting = self.meetings.get_meeting(meeting_id, host_id)
        from_date = self.clock().date() if upcoming else None
        return self.repo.get_bookings(self.db, meeting.id, on_date=on_date, from_date=from_date)

    def reschedule(
        self, meeting_id: int, booking_id: str, slot_date: date, slot_time: int, host_id: str
    ) -> BookedSlot:
        """Move a pending booking to another currently available slot"""
        meeting = self.meetings.get_meeting(meeting_id, host_id)
        booking = self._get_booking(meeting, booking_id)

        if booking.status != BookingStatus.PENDING.value:
            raise ValidationError(
                "Only pending bookings can be rescheduled", {"status": booking.status}
            )
        if booking.slot_date == slot_date and booking.slot_time == slot_time:
            return booking

        now = self.clock()
        resolution = self.resolve(meeting, slot_date, now=now, ignore=booking)
        self._ensure_bookable(resolution, slot_time)

        previous_date, previous_time = booking.slot_date, booking.slot_time
        booking.slot_date = slot_date
        booking.slot_time = slot_time
        booking.status_changed_at = now

        try:
            booking = self.repo.save(self.db, booking)
        except IntegrityError as e:
            raise ConflictError(
                "Slot is already booked",
                {"date": slot_date.isoformat(), "time": format_time(slot_time)},
            ) from e

        logger.info(
            f"🔄 Booking {booking.public_id} moved from {previous_date} "
            f"{format_time(previous_time)} to {slot_date} {format_time(slot_time)}"
        )
        self.dispatcher.publish(
            BookingRescheduled(
                **self._event_fields(meeting, booking),
                previous_date=previous_date,
                previous_time=format_time(previous_time),
            )
        )
        return booking

    def change_status(
        self, meeting_id: int, booking_id: str, requested: str, host_id: str
    ) -> BookedSlot:
        """Apply a host status decision; requesting the current status is a no-op"""
        new_status = parse_requested_status(requested)
        meeting = self.meetings.get_meeting(meeting_id, host_id)
        booking = self._get_booking(meeting, booking_id)
        current = BookingStatus(booking.status)

        if current == new_status:
            return booking

        if not validate_status_transition(current, new_status):
            raise ValidationError(
                f"Cannot change status from {current.value} to {new_status.value}",
                {"current": current.value, "requested": new_status.value},
            )

        booking.status = new_status.value
        booking.status_changed_at = self.clock()
        booking = self.repo.save(self.db, booking)

        logger.info(f"✅ Booking {booking.public_id}: {current.value} → {new_status.value}")
        self.dispatcher.publish(
            BookingStatusChanged(
                **self._event_fields(meeting, booking),
                old_status=current.value,
                new_status=new_status.value,
            )
        )
        return booking

    def delete_booking(self, meeting_id: int, booking_id: str, host_id: str) -> None:
        """Remove a booking entirely, freeing its slot"""
        meeting = self.meetings.get_meeting(meeting_id, host_id)
        booking = self._get_booking(meeting, booking_id)
        event = BookingDeleted(**self._event_fields(meeting, booking), status=booking.status)

        self.repo.delete_booking(self.db, booking)
        logger.info(f"🗑️ Booking {booking_id} deleted from meeting {meeting.id}")
        self.dispatcher.publish(event)

    def reconcile(self, meeting_id: int, host_id: str) -> dict[str, Any]:
        """
        Settle elapsed pending bookings of a meeting as completed

        Safe to run repeatedly: a second run finds nothing left to settle.

        Returns:
            Summary of settled bookings
        """
        meeting = self.meetings.get_meeting(meeting_id, host_id)
        now = self.clock()

        settled = [
            booking
            for booking in self.repo.get_pending_until(self.db, meeting.id, now.date())
            if is_elapsed(booking.slot_date, booking.slot_time, now)
        ]
        for booking in settled:
            booking.status = BookingStatus.COMPLETED.value
            booking.status_changed_at = now

        if settled:
            self.repo.save_all(self.db)
            for booking in settled:
                self.dispatcher.publish(
                    BookingStatusChanged(
                        **self._event_fields(meeting, booking),
                        old_status=BookingStatus.PENDING.value,
                        new_status=BookingStatus.COMPLETED.value,
                    )
                )

        logger.info(f"✅ Reconciled meeting {meeting.id}: {len(settled)} booking(s) completed")
        return {
            "meeting_id": meeting.id,
            "completed": len(settled),
            "booking_ids": [booking.public_id for booking in settled],
        }

    @staticmethod
    def _event_fields(meeting: Meeting, booking: BookedSlot) -> dict[str, Any]:
        return {
            "meeting_id": meeting.id,
            "host_id": meeting.host_id,
            "booking_id": booking.public_id,
            "participant_id": booking.participant_id,
            "slot_date": booking.slot_date,
            "slot_time": format_time(booking.slot_time),
        }
