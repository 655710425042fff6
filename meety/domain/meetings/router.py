"""Meeting router - FastAPI endpoints for meeting types"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_host_id
from ...database import get_db
from .schemas import MeetingCreate, MeetingResponse, MeetingUpdate, PublicMeetingResponse
from .service import MeetingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meetings", tags=["Meetings"])


def get_meeting_service(db: Session = Depends(get_db)) -> MeetingService:
    """Dependency injection for MeetingService"""
    return MeetingService(db)


# ============================================================================
# PUBLIC ENDPOINTS (no auth)
# ============================================================================


@router.get("/public/{ref}", response_model=PublicMeetingResponse)
def get_public_meeting(
    ref: str,
    service: MeetingService = Depends(get_meeting_service),
):
    """Get the public view of a meeting from its shareable link"""
    return PublicMeetingResponse.from_meeting(service.get_public_meeting(ref))


# ============================================================================
# HOST CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[MeetingResponse])
def get_meetings(
    host_id: str = Depends(get_current_host_id),
    service: MeetingService = Depends(get_meeting_service),
):
    """Get all meetings of the current host"""
    return [MeetingResponse.from_meeting(m) for m in service.get_meetings(host_id)]


@router.post("", response_model=MeetingResponse, status_code=201)
def create_meeting(
    data: MeetingCreate,
    host_id: str = Depends(get_current_host_id),
    service: MeetingService = Depends(get_meeting_service),
):
    """Create a new meeting"""
    return MeetingResponse.from_meeting(service.create_meeting(data, host_id))


@router.get("/{meeting_id}", response_model=MeetingResponse)
def get_meeting(
    meeting_id: int,
    host_id: str = Depends(get_current_host_id),
    service: MeetingService = Depends(get_meeting_service),
):
    """Get a specific meeting"""
    return MeetingResponse.from_meeting(service.get_meeting(meeting_id, host_id))


@router.put("/{meeting_id}", response_model=MeetingResponse)
def update_meeting(
    meeting_id: int,
    data: MeetingUpdate,
    host_id: str = Depends(get_current_host_id),
    service: MeetingService = Depends(get_meeting_service),
):
    """Update a meeting"""
    return MeetingResponse.from_meeting(service.update_meeting(meeting_id, data, host_id))


@router.delete("/{meeting_id}")
def delete_meeting(
    meeting_id: int,
    host_id: str = Depends(get_current_host_id),
    service: MeetingService = Depends(get_meeting_service),
):
    """Delete a meeting"""
    service.delete_meeting(meeting_id, host_id)
    return {"message": "Meeting deleted successfully"}
