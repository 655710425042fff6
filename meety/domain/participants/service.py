"""Participant service - Business logic for participant operations"""

import logging

from sqlalchemy.orm import Session

from ...exceptions import ConflictError, NotFoundError, ValidationError
from ...models import Participant
from .repository import ParticipantRepository
from .schemas import ParticipantCreate, ParticipantUpdate

logger = logging.getLogger(__name__)


class ParticipantService:
    """Service layer for participant business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ParticipantRepository()

    def register(self, data: ParticipantCreate) -> tuple[Participant, bool]:
        """
        Create a participant, or refresh name/phone when the email is known

        Returns:
            (participant, created)
        """
        existing = self.repo.get_by_email(self.db, data.email)
        if existing:
            participant = self.repo.update_participant(
                self.db,
                existing,
                full_name=data.full_name,
                phone=data.phone,
                status="active",
            )
            logger.info(f"🔄 Participant {participant.id} updated from registration")
            return participant, False

        participant = self.repo.create_participant(
            self.db,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
        )
        logger.info(f"✅ Participant {participant.id} registered")
        return participant, True

    def get_active_participant(self, participant_id: int) -> Participant:
        """Resolve a participant reference for booking"""
        participant = self.repo.get_active(self.db, participant_id)
        if not participant:
            raise ValidationError(
                "Participant not found", {"participant_id": participant_id}
            )
        return participant

    def get_participants(self, host_id: str) -> list[Participant]:
        return self.repo.get_participants_for_host(self.db, host_id)

    def get_participant(self, participant_id: int, host_id: str) -> Participant:
        participant = self.repo.get_participant_for_host(self.db, participant_id, host_id)
        if not participant:
            raise NotFoundError("Participant not found", {"participant_id": participant_id})
        return participant

    def update_participant(
        self, participant_id: int, data: ParticipantUpdate, host_id: str
    ) -> Participant:
        participant = self.get_participant(participant_id, host_id)

        if data.email is not None and data.email != participant.email:
            if self.repo.get_by_email(self.db, data.email):
                raise ConflictError("Email already registered", {"email": data.email})

        return self.repo.update_participant(
            self.db,
            participant,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
        )

    def delete_participant(self, participant_id: int, host_id: str) -> None:
        """Soft delete; existing bookings keep their participant reference"""
        participant = self.get_participant(participant_id, host_id)
        self.repo.update_participant(self.db, participant, status="deleted")
        logger.info(f"🗑️ Participant {participant_id} deleted by host {host_id}")
