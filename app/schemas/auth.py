from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr

from app.schemas.user import UserOut


# 엑세스 토큰
class TokenPayload(BaseModel):
    id: UUID
    email: str
    role: str


class LoginInfo(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class EmailRequest(BaseModel):
    email: EmailStr


class OtpVerifyRequest(BaseModel):
    email: EmailStr
    otp: str


class OtpResendResponse(BaseModel):
    message: str
    verification_code: Optional[str] = None


class VerifyTokenResponse(BaseModel):
    valid: bool
    claims: TokenPayload
