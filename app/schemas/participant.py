from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from app.schemas.common import to_naive_utc
from app.schemas.user import UserWithRoleSummary


class ParticipantCreate(BaseModel):
    meeting_id: str
    user_id: str
    role: str
    joined_at: Optional[datetime] = None
    left_at: Optional[datetime] = None

    @field_validator("joined_at", "left_at")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class ParticipantUpdate(BaseModel):
    role: Optional[str] = None
    joined_at: Optional[datetime] = None
    left_at: Optional[datetime] = None

    @field_validator("joined_at", "left_at")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class MeetingSummary(BaseModel):
    id: UUID
    room_name: str
    s_date: datetime

    model_config = ConfigDict(from_attributes=True)


class ParticipantResponse(BaseModel):
    id: UUID
    meeting_id: UUID
    user_id: UUID
    role: str
    joined_at: Optional[datetime] = None
    left_at: Optional[datetime] = None
    user: Optional[UserWithRoleSummary] = None
    meeting: Optional[MeetingSummary] = None

    model_config = ConfigDict(from_attributes=True)
