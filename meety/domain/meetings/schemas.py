"""Meeting domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...config import FRONTEND_URL, MAX_MEETING_DURATION, MIN_MEETING_DURATION
from ..scheduling.availability import WeeklyAvailability
from ..scheduling.schemas import AvailabilitySchema

MeetingType = Literal["video", "phone", "in-person"]


def _validate_title(v):
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Title is required")
    return v


def _validate_duration(v):
    if v is None:
        return v
    if v < MIN_MEETING_DURATION:
        raise ValueError(f"Duration must be at least {MIN_MEETING_DURATION} minutes")
    if v > MAX_MEETING_DURATION:
        raise ValueError(f"Duration cannot exceed {MAX_MEETING_DURATION} minutes")
    return v


class MeetingCreate(BaseModel):
    """Schema for creating a new meeting"""

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    duration: int
    type: MeetingType = "video"
    availability: AvailabilitySchema = Field(
        default_factory=lambda: AvailabilitySchema.from_domain(WeeklyAvailability.default())
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _validate_title(v)

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v):
        return _validate_duration(v)


class MeetingUpdate(BaseModel):
    """Schema for updating an existing meeting; omitted fields are left unchanged"""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    duration: Optional[int] = None
    type: Optional[MeetingType] = None
    status: Optional[Literal["active", "inactive"]] = None
    availability: Optional[AvailabilitySchema] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _validate_title(v)

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v):
        return _validate_duration(v)


class MeetingResponse(BaseModel):
    """Schema for meeting response"""

    id: int
    title: str
    description: Optional[str] = None
    duration: int
    type: str
    status: str
    availability: AvailabilitySchema
    shareable_link: str
    booking_url: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_meeting(cls, meeting) -> "MeetingResponse":
        return cls(
            id=meeting.id,
            title=meeting.title,
            description=meeting.description,
            duration=meeting.duration,
            type=meeting.meeting_type,
            status=meeting.status,
            availability=AvailabilitySchema.from_domain(
                WeeklyAvailability.from_storage(meeting.availability)
            ),
            shareable_link=meeting.shareable_link,
            booking_url=f"{FRONTEND_URL}/book/{meeting.shareable_link}",
            created_at=meeting.created_at,
            updated_at=meeting.updated_at,
        )


class PublicMeetingResponse(BaseModel):
    """What a third party sees before booking"""

    title: str
    description: Optional[str] = None
    duration: int
    type: str
    accepting_bookings: bool
    availability: AvailabilitySchema
    shareable_link: str

    @classmethod
    def from_meeting(cls, meeting) -> "PublicMeetingResponse":
        return cls(
            title=meeting.title,
            description=meeting.description,
            duration=meeting.duration,
            type=meeting.meeting_type,
            accepting_bookings=meeting.status == "active",
            availability=AvailabilitySchema.from_domain(
                WeeklyAvailability.from_storage(meeting.availability)
            ),
            shareable_link=meeting.shareable_link,
        )
