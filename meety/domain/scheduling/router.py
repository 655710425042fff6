"""Scheduling router - Public availability/booking and host booking management"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ...auth import get_current_host_id
from ...config import HOST_TIMEZONE
from ...database import get_db
from ...services.notification_service import EventDispatcher
from .schemas import (
    AvailableDatesResponse,
    BookedSlotResponse,
    BookingConfirmation,
    BookingRequest,
    ReconcileResponse,
    RescheduleRequest,
    SlotsResponse,
    StatusUpdateRequest,
)
from .service import SchedulingService
from .time_calculator import Clock, format_time, make_clock, parse_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meetings", tags=["Scheduling"])


def get_dispatcher(request: Request) -> EventDispatcher:
    """The dispatcher built at startup (see main.py)"""
    return request.app.state.dispatcher


def get_clock() -> Clock:
    return make_clock(HOST_TIMEZONE)


def get_scheduling_service(
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
    clock: Clock = Depends(get_clock),
) -> SchedulingService:
    """Dependency injection for SchedulingService"""
    return SchedulingService(db, dispatcher=dispatcher, clock=clock)


# ============================================================================
# PUBLIC ENDPOINTS (no auth)
# ============================================================================


@router.get("/public/{ref}/availability", response_model=SlotsResponse)
def get_available_slots(
    ref: str,
    date: str = Query(..., description="YYYY-MM-DD"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Get the bookable start times of a date"""
    on_date = parse_date(date)
    meeting, slots = service.available_slots(ref, on_date)
    return SlotsResponse(
        date=on_date, duration=meeting.duration, slots=[format_time(t) for t in slots]
    )


@router.get("/public/{ref}/available-dates", response_model=AvailableDatesResponse)
def get_available_dates(
    ref: str,
    start: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
    days: int = Query(31),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Get the dates of a range that still have an open slot"""
    start_date = parse_date(start) if start else None
    start_date, dates = service.available_dates(ref, start_date, days)
    return AvailableDatesResponse(start=start_date, days=days, dates=dates)


@router.post("/public/{ref}/book", response_model=BookingConfirmation, status_code=201)
def book_slot(
    ref: str,
    data: BookingRequest,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Book a slot (public)"""
    slot_date, slot_time = data.slot()
    booking = service.book(ref, slot_date, slot_time, data.participant_id)
    return BookingConfirmation(
        message="Meeting booked successfully",
        booking=BookedSlotResponse.from_booking(booking, service.clock()),
    )


# ============================================================================
# HOST BOOKING MANAGEMENT
# ============================================================================


@router.get("/{meeting_id}/bookings", response_model=list[BookedSlotResponse])
def get_bookings(
    meeting_id: int,
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    upcoming: bool = Query(False),
    host_id: str = Depends(get_current_host_id),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Get the booked slots of a meeting"""
    on_date = parse_date(date) if date else None
    bookings = service.list_bookings(meeting_id, host_id, on_date=on_date, upcoming=upcoming)
    now = service.clock()
    return [BookedSlotResponse.from_booking(b, now) for b in bookings]


@router.patch("/{meeting_id}/bookings/{booking_id}", response_model=BookedSlotResponse)
def reschedule_booking(
    meeting_id: int,
    booking_id: str,
    data: RescheduleRequest,
    host_id: str = Depends(get_current_host_id),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Move a pending booking to another available slot"""
    slot_date, slot_time = data.slot()
    booking = service.reschedule(meeting_id, booking_id, slot_date, slot_time, host_id)
    return BookedSlotResponse.from_booking(booking, service.clock())


@router.patch("/{meeting_id}/bookings/{booking_id}/status", response_model=BookedSlotResponse)
def update_booking_status(
    meeting_id: int,
    booking_id: str,
    data: StatusUpdateRequest,
    host_id: str = Depends(get_current_host_id),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Mark a booking completed, missed or cancelled"""
    booking = service.change_status(meeting_id, booking_id, data.status, host_id)
    return BookedSlotResponse.from_booking(booking, service.clock())


@router.delete("/{meeting_id}/bookings/{booking_id}")
def delete_booking(
    meeting_id: int,
    booking_id: str,
    host_id: str = Depends(get_current_host_id),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Delete a booking"""
    service.delete_booking(meeting_id, booking_id, host_id)
    return {"message": "Booking deleted successfully"}


@router.post("/{meeting_id}/reconcile", response_model=ReconcileResponse)
def reconcile_bookings(
    meeting_id: int,
    host_id: str = Depends(get_current_host_id),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Complete every pending booking whose time has passed"""
    return service.reconcile(meeting_id, host_id)
