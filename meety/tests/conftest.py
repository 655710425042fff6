from __future__ import annotations

import itertools
from datetime import date, datetime
from typing import Iterable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from meety.auth import create_access_token
from meety.database import Base, build_engine, get_db
from meety.domain.scheduling.availability import WEEKDAYS
from meety.domain.scheduling.router import get_clock, get_dispatcher
from meety.domain.scheduling.service import SchedulingService
from meety.domain.scheduling.time_calculator import parse_time
from meety.main import app
from meety.models import BookedSlot, Meeting, Participant
from meety.services.notification_service import BookingEvent, EventDispatcher

# Monday 2030-01-07, 10:15 host-local
NOW = datetime(2030, 1, 7, 10, 15)
TODAY = NOW.date()
YESTERDAY = date(2030, 1, 6)
NEXT_MONDAY = date(2030, 1, 14)
NEXT_TUESDAY = date(2030, 1, 15)

HOST_ID = "host-1"
OTHER_HOST_ID = "host-2"


def fixed_clock() -> datetime:
    return NOW


def availability_for(
    windows: Iterable[tuple[str, str]] = (("09:00", "10:00"),),
    weekdays: Iterable[str] = ("monday",),
) -> dict:
    """Storage-form weekly availability with the given weekdays enabled"""
    enabled = set(weekdays)
    stored_windows = [{"start": parse_time(s), "end": parse_time(e)} for s, e in windows]
    return {
        name: {"enabled": name in enabled, "windows": stored_windows if name in enabled else []}
        for name in WEEKDAYS
    }


class RecordingHandler:
    """Collects published events for assertions"""

    def __init__(self) -> None:
        self.events: list[BookingEvent] = []

    def __call__(self, event: BookingEvent) -> None:
        self.events.append(event)

    def types(self) -> list[str]:
        return [event.event_type for event in self.events]


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'meety-test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def recorder() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def dispatcher(recorder) -> EventDispatcher:
    dispatcher = EventDispatcher()
    dispatcher.subscribe(recorder)
    return dispatcher


@pytest.fixture
def service(db, dispatcher) -> SchedulingService:
    return SchedulingService(db, dispatcher=dispatcher, clock=fixed_clock)


@pytest.fixture
def make_meeting(db):
    def _make(
        duration: int = 30,
        windows: Iterable[tuple[str, str]] = (("09:00", "10:00"),),
        weekdays: Iterable[str] = ("monday",),
        status: str = "active",
        host_id: str = HOST_ID,
        title: str = "Intro call",
    ) -> Meeting:
        meeting = Meeting(
            host_id=host_id,
            title=title,
            duration=duration,
            status=status,
            availability=availability_for(windows, weekdays),
        )
        db.add(meeting)
        db.commit()
        db.refresh(meeting)
        return meeting

    return _make


@pytest.fixture
def make_participant(db):
    counter = itertools.count(1)

    def _make(full_name: str = "Dana Levi", status: str = "active") -> Participant:
        n = next(counter)
        participant = Participant(
            full_name=full_name,
            email=f"participant{n}@example.com",
            phone=f"050-000-{n:04d}",
            status=status,
        )
        db.add(participant)
        db.commit()
        db.refresh(participant)
        return participant

    return _make


@pytest.fixture
def add_booking(db):
    """Write a ledger row directly, bypassing availability checks"""

    def _add(
        meeting: Meeting,
        participant: Participant,
        slot_date: date,
        slot_time: str,
        status: str = "pending",
        status_changed_at: Optional[datetime] = None,
    ) -> BookedSlot:
        booking = BookedSlot(
            meeting_id=meeting.id,
            participant_id=participant.id,
            slot_date=slot_date,
            slot_time=parse_time(slot_time),
            status=status,
            status_changed_at=status_changed_at,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _add


@pytest.fixture
def client(session_factory, dispatcher):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    # Not used as a context manager: the lifespan would touch the configured database
    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(HOST_ID)}"}


@pytest.fixture
def other_host_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(OTHER_HOST_ID)}"}
