"""Meeting repository - Database operations for meeting types"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Meeting


class MeetingRepository:
    """Repository for meeting database operations"""

    @staticmethod
    def get_meetings(db: Session, host_id: str) -> list[Meeting]:
        """Get all meetings of a host that are not soft-deleted"""
        return (
            db.query(Meeting)
            .filter(Meeting.host_id == host_id, Meeting.status != "deleted")
            .order_by(Meeting.created_at.desc(), Meeting.id.desc())
            .all()
        )

    @staticmethod
    def get_meeting_by_id(db: Session, meeting_id: int, host_id: str) -> Optional[Meeting]:
        """Get a host's meeting by ID"""
        return (
            db.query(Meeting)
            .filter(
                Meeting.id == meeting_id,
                Meeting.host_id == host_id,
                Meeting.status != "deleted",
            )
            .first()
        )

    @staticmethod
    def get_public_meeting(db: Session, ref: str) -> Optional[Meeting]:
        """Get a meeting by shareable link, falling back to its numeric ID"""
        meeting = (
            db.query(Meeting)
            .filter(Meeting.shareable_link == ref, Meeting.status != "deleted")
            .first()
        )
        if meeting is None and ref.isdigit():
            meeting = (
                db.query(Meeting)
                .filter(Meeting.id == int(ref), Meeting.status != "deleted")
                .first()
            )
        return meeting

    @staticmethod
    def create_meeting(db: Session, host_id: str, **meeting_data) -> Meeting:
        """Create a new meeting"""
        meeting = Meeting(host_id=host_id, **meeting_data)
        db.add(meeting)
        db.commit()
        db.refresh(meeting)
        return meeting

    @staticmethod
    def update_meeting(db: Session, meeting: Meeting, **updates) -> Meeting:
        """Update a meeting with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(meeting, key):
                setattr(meeting, key, value)

        db.commit()
        db.refresh(meeting)
        return meeting

    @staticmethod
    def soft_delete_meeting(db: Session, meeting: Meeting) -> None:
        """Mark a meeting deleted; its bookings stay in the ledger"""
        meeting.status = "deleted"
        db.commit()
