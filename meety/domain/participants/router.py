"""Participant router - FastAPI endpoints for participants"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...auth import get_current_host_id
from ...database import get_db
from .schemas import ParticipantCreate, ParticipantResponse, ParticipantUpdate
from .service import ParticipantService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/participants", tags=["Participants"])


def get_participant_service(db: Session = Depends(get_db)) -> ParticipantService:
    """Dependency injection for ParticipantService"""
    return ParticipantService(db)


@router.post("", response_model=ParticipantResponse)
def register_participant(
    data: ParticipantCreate,
    response: Response,
    service: ParticipantService = Depends(get_participant_service),
):
    """Register a participant before booking (public)"""
    participant, created = service.register(data)
    response.status_code = 201 if created else 200
    return participant


@router.get("", response_model=list[ParticipantResponse])
def get_participants(
    host_id: str = Depends(get_current_host_id),
    service: ParticipantService = Depends(get_participant_service),
):
    """Get everyone who booked one of the current host's meetings"""
    return service.get_participants(host_id)


@router.get("/{participant_id}", response_model=ParticipantResponse)
def get_participant(
    participant_id: int,
    host_id: str = Depends(get_current_host_id),
    service: ParticipantService = Depends(get_participant_service),
):
    return service.get_participant(participant_id, host_id)


@router.put("/{participant_id}", response_model=ParticipantResponse)
def update_participant(
    participant_id: int,
    data: ParticipantUpdate,
    host_id: str = Depends(get_current_host_id),
    service: ParticipantService = Depends(get_participant_service),
):
    return service.update_participant(participant_id, data, host_id)


@router.delete("/{participant_id}")
def delete_participant(
    participant_id: int,
    host_id: str = Depends(get_current_host_id),
    service: ParticipantService = Depends(get_participant_service),
):
    service.delete_participant(participant_id, host_id)
    return {"message": "Participant deleted successfully"}
