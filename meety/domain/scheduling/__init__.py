"""
Scheduling Domain

Weekly availability, slot generation, availability resolution and the booking
ledger for a meeting type.

Structure:
```
meety/domain/scheduling/
├── __init__.py
├── time_calculator.py      # HH:MM <-> minutes, dates, host-local "now"
├── availability.py         # Weekly template (weekday -> windows)
├── slots.py                # Slot generation over a window
├── availability_service.py # Resolver: bookable slots of a date
├── status.py               # Booking status transitions
├── repository.py           # Booked slot queries
├── service.py              # Booking, reschedule, status, reconcile
├── schemas.py              # Wire formats
└── router.py               # Public and host endpoints
```

ENDPOINTS:
- GET /meetings/public/{ref}/availability?date= - Bookable times (public)
- GET /meetings/public/{ref}/available-dates - Dates with open slots (public)
- POST /meetings/public/{ref}/book - Book a slot (public)
- GET /meetings/{meeting_id}/bookings - Booked slots
- PATCH /meetings/{meeting_id}/bookings/{booking_id} - Reschedule
- PATCH /meetings/{meeting_id}/bookings/{booking_id}/status - Change status
- DELETE /meetings/{meeting_id}/bookings/{booking_id} - Delete booking
- POST /meetings/{meeting_id}/reconcile - Complete elapsed pending bookings

DOUBLE BOOKING:
- Every booking re-resolves the date inside the request
- A partial unique index on live (meeting_id, slot_date, slot_time) makes the
  insert atomic; the loser of a race gets 409
"""
