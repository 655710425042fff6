"""Participant domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_full_name, validate_phone


class ParticipantCreate(BaseModel):
    """Schema for registering a participant (upsert by email)"""

    full_name: str = Field(max_length=100)
    email: str
    phone: str

    @field_validator("full_name")
    @classmethod
    def validate_name(cls, v):
        return validate_full_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v):
        if not v or not v.strip():
            raise ValueError("Phone number is required")
        return validate_phone(v)


class ParticipantUpdate(BaseModel):
    """Schema for updating a participant"""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def validate_name(cls, v):
        return validate_full_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v):
        if v:
            return validate_phone(v)
        return v


class ParticipantResponse(BaseModel):
    """Schema for participant response"""

    id: int
    full_name: str
    email: str
    phone: str
    status: str
    last_meeting_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
