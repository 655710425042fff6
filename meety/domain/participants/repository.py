"""Participant repository - Database operations for participants"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import BookedSlot, Meeting, Participant


class ParticipantRepository:
    """Repository for participant database operations"""

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[Participant]:
        return db.query(Participant).filter(Participant.email == email).first()

    @staticmethod
    def get_active(db: Session, participant_id: int) -> Optional[Participant]:
        """Get a participant that can still book"""
        return (
            db.query(Participant)
            .filter(Participant.id == participant_id, Participant.status == "active")
            .first()
        )

    @staticmethod
    def _host_scope(db: Session, host_id: str):
        # Hosts only see people who booked one of their meetings
        return (
            db.query(Participant)
            .join(BookedSlot, BookedSlot.participant_id == Participant.id)
            .join(Meeting, Meeting.id == BookedSlot.meeting_id)
            .filter(Meeting.host_id == host_id, Participant.status == "active")
            .distinct()
        )

    @staticmethod
    def get_participants_for_host(db: Session, host_id: str) -> list[Participant]:
        return (
            ParticipantRepository._host_scope(db, host_id)
            .order_by(Participant.full_name, Participant.id)
            .all()
        )

    @staticmethod
    def get_participant_for_host(
        db: Session, participant_id: int, host_id: str
    ) -> Optional[Participant]:
        return (
            ParticipantRepository._host_scope(db, host_id)
            .filter(Participant.id == participant_id)
            .first()
        )

    @staticmethod
    def create_participant(db: Session, **participant_data) -> Participant:
        """Create a new participant"""
        participant = Participant(**participant_data)
        db.add(participant)
        db.commit()
        db.refresh(participant)
        return participant

    @staticmethod
    def update_participant(db: Session, participant: Participant, **updates) -> Participant:
        """Update a participant with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(participant, key):
                setattr(participant, key, value)

        db.commit()
        db.refresh(participant)
        return participant
