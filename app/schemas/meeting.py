from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from app.schemas.common import to_naive_utc
from app.schemas.user import UserSummary, UserWithRoleSummary


class MeetingCreate(BaseModel):
    base_room_name: str
    s_date: datetime
    e_date: Optional[datetime] = None

    @field_validator("s_date", "e_date")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class MeetingUpdate(BaseModel):
    room_name: Optional[str] = None
    s_date: Optional[datetime] = None
    e_date: Optional[datetime] = None

    @field_validator("s_date", "e_date")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class MeetingEndDateUpdate(BaseModel):
    e_date: datetime

    @field_validator("e_date")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class MeetingResponse(BaseModel):
    id: UUID
    room_name: str
    s_date: datetime
    e_date: Optional[datetime] = None
    created_by: UUID
    created_at: datetime
    creator: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)


# 회의 상세 (참석자 포함)
class MeetingParticipantItem(BaseModel):
    id: UUID
    user_id: UUID
    role: str
    joined_at: Optional[datetime] = None
    left_at: Optional[datetime] = None
    user: Optional[UserWithRoleSummary] = None

    model_config = ConfigDict(from_attributes=True)


class MeetingDetailResponse(MeetingResponse):
    participants: List[MeetingParticipantItem] = []
