"""Meeting service - Business logic for meeting type operations"""

import logging

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError
from ...models import Meeting
from .repository import MeetingRepository
from .schemas import MeetingCreate, MeetingUpdate

logger = logging.getLogger(__name__)


class MeetingService:
    """Service layer for meeting business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MeetingRepository()

    def get_meetings(self, host_id: str) -> list[Meeting]:
        """Get all meetings for a host"""
        return self.repo.get_meetings(self.db, host_id)

    def get_meeting(self, meeting_id: int, host_id: str) -> Meeting:
        """Get a specific meeting owned by the host"""
        meeting = self.repo.get_meeting_by_id(self.db, meeting_id, host_id)
        if not meeting:
            raise NotFoundError("Meeting not found", {"meeting_id": meeting_id})
        return meeting

    def get_public_meeting(self, ref: str) -> Meeting:
        """Resolve a meeting from its shareable link (or numeric id)"""
        meeting = self.repo.get_public_meeting(self.db, ref)
        if not meeting:
            raise NotFoundError("Meeting not found")
        return meeting

    def create_meeting(self, data: MeetingCreate, host_id: str) -> Meeting:
        """Create a new meeting with a validated weekly availability"""
        logger.info(f"📥 Creating meeting for host_id: {host_id}")

        availability = data.availability.to_domain()
        availability.ensure_no_overlaps()

        meeting = self.repo.create_meeting(
            self.db,
            host_id,
            title=data.title,
            description=data.description,
            duration=data.duration,
            meeting_type=data.type,
            availability=availability.to_storage(),
        )
        logger.info(f"✅ Meeting {meeting.id} created ({meeting.duration} min)")
        return meeting

    def update_meeting(self, meeting_id: int, data: MeetingUpdate, host_id: str) -> Meeting:
        """
        Update a meeting

        Existing bookings are never rewritten when duration or availability
        change. They stay in the ledger and keep occupying their start times.
        """
        meeting = self.get_meeting(meeting_id, host_id)

        updates = {}
        if data.title is not None:
            updates["title"] = data.title
        if data.description is not None:
            updates["description"] = data.description
        if data.duration is not None:
            updates["duration"] = data.duration
        if data.type is not None:
            updates["meeting_type"] = data.type
        if data.status is not None:
            updates["status"] = data.status
        if data.availability is not None:
            availability = data.availability.to_domain()
            availability.ensure_no_overlaps()
            updates["availability"] = availability.to_storage()

        meeting = self.repo.update_meeting(self.db, meeting, **updates)
        logger.info(f"✏️ Meeting {meeting.id} updated: {sorted(updates)}")
        return meeting

    def delete_meeting(self, meeting_id: int, host_id: str) -> None:
        """Soft delete a meeting; it stops resolving publicly"""
        meeting = self.get_meeting(meeting_id, host_id)
        self.repo.soft_delete_meeting(self.db, meeting)
        logger.info(f"🗑️ Meeting {meeting_id} deleted by host {host_id}")
