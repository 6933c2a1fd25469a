# routers/auth.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.core.config import settings
from app.core.errors import NotFoundError
from app.crud.crud_user import get_user_by_id
from app.db.db_session import get_db_session
from app.schemas.auth import (
    EmailRequest,
    LoginInfo,
    LoginResponse,
    OtpResendResponse,
    OtpVerifyRequest,
    TokenPayload,
    VerifyTokenResponse,
)
from app.schemas.user import MessageResponse, RegisterResponse, UserOut
from app.services.notify_email_service import EmailSender, get_email_sender
from app.services.signup_service import account
from app.services.storage_service import LocalFileStorage, get_file_storage

logger = logging.getLogger(__name__)

router = APIRouter()


# 회원가입
@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    role: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db_session),
    mailer: EmailSender = Depends(get_email_sender),
    storage: LocalFileStorage = Depends(get_file_storage),
):
    user, code = await account.register(
        db, mailer, storage,
        name=name, email=email, password=password, role=role,
        profile_image=profile_image,
    )

    if code:
        message = "Registered successfully. Check your email for the verification code"
    else:
        message = "Registered successfully"

    return RegisterResponse(
        message=message,
        user=UserOut.model_validate(user),
        verification_code=code if settings.EXPOSE_VERIFICATION_CODE else None,
    )


# 로그인
@router.post("/login", response_model=LoginResponse)
async def login(user: LoginInfo, db: AsyncSession = Depends(get_db_session)):
    access_token, auth_user = await account.authenticate(db, user.email, user.password)
    return LoginResponse(access_token=access_token, user=UserOut.model_validate(auth_user))


@router.post("/verify-otp", response_model=MessageResponse)
async def verify_otp(payload: OtpVerifyRequest, db: AsyncSession = Depends(get_db_session)):
    await account.verify_account(db, payload.email, payload.otp)
    return {"message": "Account verified successfully"}


@router.post("/resend-otp", response_model=OtpResendResponse)
async def resend_otp(
    payload: EmailRequest,
    db: AsyncSession = Depends(get_db_session),
    mailer: EmailSender = Depends(get_email_sender),
):
    _, code = await account.resend_verification_code(db, mailer, payload.email)
    return OtpResendResponse(
        message="Verification code sent",
        verification_code=code if settings.EXPOSE_VERIFICATION_CODE else None,
    )


# 토큰 검증
@router.get("/verify-token", response_model=VerifyTokenResponse)
async def verify_token(token_user: TokenPayload = Depends(get_current_user)):
    return VerifyTokenResponse(valid=True, claims=token_user)


@router.get("/me", response_model=UserOut)
async def read_me(
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    user = await get_user_by_id(db, token_user.id)
    if not user:
        raise NotFoundError("User not found")
    return user
