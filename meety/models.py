import secrets
import uuid

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_public_id():
    """Generate a unique public ID for secure public access"""
    return str(uuid.uuid4())


def generate_shareable_link():
    """Random 32-hex token used in public booking URLs"""
    return secrets.token_hex(16)


def default_availability():
    """Every weekday disabled with a 09:00-17:00 window ready to switch on"""
    from .domain.scheduling.availability import WeeklyAvailability

    return WeeklyAvailability.default().to_storage()


class Meeting(Base):
    """A bookable meeting type with a recurring weekly availability template"""

    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, index=True)
    host_id = Column(String(255), nullable=False, index=True)  # Opaque id from the auth token
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=False)  # minutes
    meeting_type = Column(String(20), default="video", nullable=False)  # video, phone, in-person

    # active: bookable, inactive: visible but closed, deleted: soft-deleted
    status = Column(String(20), default="active", nullable=False, index=True)

    # {"monday": {"enabled": true, "windows": [{"start": 540, "end": 600}]}, ...}
    # Read with the row so every booking validates against one consistent snapshot.
    availability = Column(JSON, nullable=False, default=default_availability)

    shareable_link = Column(
        String(64), unique=True, nullable=False, index=True, default=generate_shareable_link
    )

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    booked_slots = relationship(
        "BookedSlot",
        back_populates="meeting",
        order_by="[BookedSlot.slot_date, BookedSlot.slot_time]",
    )


class Participant(Base):
    """Third party who books slots"""

    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(20), nullable=False, index=True)
    status = Column(String(20), default="active", nullable=False, index=True)  # active, deleted
    last_meeting_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    booked_slots = relationship("BookedSlot", back_populates="participant")


class BookedSlot(Base):
    """A committed reservation of one slot by one participant"""

    __tablename__ = "booked_slots"
    __table_args__ = (
        # Database-level protection against double booking: one live booking per
        # (meeting, date, time). Cancelled rows are outside the index so the slot
        # can be booked again.
        Index(
            "uq_booked_slots_live_slot",
            "meeting_id",
            "slot_date",
            "slot_time",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
        Index("ix_booked_slots_meeting_date", "meeting_id", "slot_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    public_id = Column(
        String(36), unique=True, nullable=False, index=True, default=generate_public_id
    )

    meeting_id = Column(Integer, ForeignKey("meetings.id"), nullable=False)
    participant_id = Column(Integer, ForeignKey("participants.id"), nullable=False)

    slot_date = Column(Date, nullable=False)
    slot_time = Column(Integer, nullable=False)  # minutes since midnight

    # Status workflow: pending -> completed / missed / cancelled
    # completed <-> missed may be toggled by the host; cancelled is terminal
    status = Column(String(20), default="pending", nullable=False, index=True)
    status_changed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    meeting = relationship("Meeting", back_populates="booked_slots")
    participant = relationship("Participant", back_populates="booked_slots")
