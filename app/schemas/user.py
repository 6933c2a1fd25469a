from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


# 응답용 스키마 (password, verification_code 는 절대 포함하지 않음)
class UserOut(BaseModel):
    id: UUID
    name: str
    email: str
    role: str
    profile_image_url: Optional[str] = None
    is_verified: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    id: UUID
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserWithRoleSummary(UserSummary):
    role: str


class RegisterResponse(BaseModel):
    message: str
    user: UserOut
    verification_code: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
