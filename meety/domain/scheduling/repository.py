"""Booking ledger repository - Database operations for booked slots"""

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ...models import BookedSlot
from .status import BookingStatus

logger = logging.getLogger(__name__)


class BookingRepository:
    """Repository for the per-meeting booking ledger"""

    @staticmethod
    def get_booked_times(db: Session, meeting_id: int, on_date: date) -> list[int]:
        """Start times occupied on a date (every status except cancelled)"""
        rows = (
            db.query(BookedSlot.slot_time)
            .filter(
                BookedSlot.meeting_id == meeting_id,
                BookedSlot.slot_date == on_date,
                BookedSlot.status != BookingStatus.CANCELLED.value,
            )
            .all()
        )
        return [row.slot_time for row in rows]

    @staticmethod
    def get_booked_times_between(
        db: Session, meeting_id: int, start: date, end: date
    ) -> dict[date, list[int]]:
        """Occupied start times grouped by date for start <= date <= end"""
        rows = (
            db.query(BookedSlot.slot_date, BookedSlot.slot_time)
            .filter(
                BookedSlot.meeting_id == meeting_id,
                BookedSlot.slot_date >= start,
                BookedSlot.slot_date <= end,
                BookedSlot.status != BookingStatus.CANCELLED.value,
            )
            .all()
        )
        booked: dict[date, list[int]] = defaultdict(list)
        for row in rows:
            booked[row.slot_date].append(row.slot_time)
        return booked

    @staticmethod
    def get_booking(db: Session, meeting_id: int, public_id: str) -> Optional[BookedSlot]:
        """Get a booked slot of a meeting by its public id"""
        return (
            db.query(BookedSlot)
            .options(joinedload(BookedSlot.participant))
            .filter(BookedSlot.meeting_id == meeting_id, BookedSlot.public_id == public_id)
            .first()
        )

    @staticmethod
    def get_bookings(
        db: Session,
        meeting_id: int,
        on_date: Optional[date] = None,
        from_date: Optional[date] = None,
    ) -> list[BookedSlot]:
        """Bookings of a meeting ordered by date and time, with optional filters"""
        query = (
            db.query(BookedSlot)
            .options(joinedload(BookedSlot.participant))
            .filter(BookedSlot.meeting_id == meeting_id)
        )

        if on_date is not None:
            query = query.filter(BookedSlot.slot_date == on_date)
        if from_date is not None:
            query = query.filter(BookedSlot.slot_date >= from_date)

        return query.order_by(BookedSlot.slot_date, BookedSlot.slot_time).all()

    @staticmethod
    def get_pending_until(db: Session, meeting_id: int, until: date) -> list[BookedSlot]:
        """Pending bookings dated on or before `until` (callers refine by time of day)"""
        return (
            db.query(BookedSlot)
            .filter(
                BookedSlot.meeting_id == meeting_id,
                BookedSlot.status == BookingStatus.PENDING.value,
                BookedSlot.slot_date <= until,
            )
            .order_by(BookedSlot.slot_date, BookedSlot.slot_time)
            .all()
        )

    @staticmethod
    def add_booking(db: Session, booking: BookedSlot) -> BookedSlot:
        """
        Insert a booking and commit.

        The partial unique index on (meeting_id, slot_date, slot_time) makes this
        an atomic insert-if-absent: a concurrent winner causes IntegrityError here.
        The session is rolled back before the error propagates.
        """
        try:
            db.add(booking)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(booking)
        return booking

    @staticmethod
    def save(db: Session, booking: BookedSlot) -> BookedSlot:
        """Commit pending changes to a booking"""
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(booking)
        return booking

    @staticmethod
    def save_all(db: Session) -> None:
        try:
            db.commit()
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to commit booking changes: {e}")
            db.rollback()
            raise

    @staticmethod
    def delete_booking(db: Session, booking: BookedSlot) -> None:
        """Remove a booking from the ledger"""
        try:
            db.delete(booking)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
