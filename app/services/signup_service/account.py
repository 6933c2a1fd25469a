# 회원가입, 이메일 인증(OTP), 로그인
# EMAIL_VERIFICATION_ENABLED 가 켜져 있으면 미인증 상태로 가입, 코드 확인 후 인증 완료 (되돌릴 수 없음)
# 꺼져 있으면 인증된 상태로 가입하고 로그인 시 인증 여부를 확인하지 않음
import logging
import secrets
from typing import Optional

from fastapi import UploadFile
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.crud.crud_base import commit_or_raise
from app.crud.crud_user import EMAIL_EXISTS, add_user, get_user_by_email
from app.models import User, UserRole
from app.services.notify_email_service import EmailSender, send_verification_code
from app.services.signup_service.auth import create_user_token
from app.services.storage_service import LocalFileStorage

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def generate_verification_code(length: Optional[int] = None) -> str:
    length = length or settings.OTP_LENGTH
    return "".join(str(secrets.randbelow(10)) for _ in range(length))


def require_fields(**fields) -> dict:
    """공백 제거 후 비어 있는 필수 값이 있으면 ValidationError"""
    cleaned = {key: (value or "").strip() for key, value in fields.items()}
    missing = [key for key, value in cleaned.items() if not value]
    if missing:
        raise ValidationError(f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required")
    return cleaned


def normalize_email(email: str) -> str:
    try:
        return _email_adapter.validate_python(email.strip())
    except PydanticValidationError:
        raise ValidationError("Invalid email address")


async def register(
    db: AsyncSession,
    mailer: EmailSender,
    storage: LocalFileStorage,
    name: str,
    email: str,
    password: str,
    role: Optional[str] = None,
    profile_image: Optional[UploadFile] = None,
) -> tuple[User, Optional[str]]:
    # password 는 공백 검사만 하고 원본 값을 그대로 해싱
    cleaned = require_fields(name=name, email=email, password=password)
    email = normalize_email(cleaned["email"])

    if await get_user_by_email(db, email):
        raise ConflictError(EMAIL_EXISTS)

    code = generate_verification_code() if settings.EMAIL_VERIFICATION_ENABLED else None
    user = await add_user(
        db,
        name=cleaned["name"],
        email=email,
        password=get_password_hash(password),
        role=(role or "").strip() or UserRole.STUDENT,
        is_verified=not settings.EMAIL_VERIFICATION_ENABLED,
        verification_code=code,
    )

    # 이미지 저장, 메일 발송이 모두 성공해야 커밋 (실패 시 계정과 파일 모두 남기지 않음)
    profile_image_url = None
    try:
        if profile_image is not None and profile_image.filename:
            profile_image_url = await storage.save(profile_image)
            user.profile_image_url = profile_image_url
        if code:
            await send_verification_code(mailer, user.email, user.name, code)
        await commit_or_raise(db, EMAIL_EXISTS)
    except Exception:
        await db.rollback()
        if profile_image_url:
            await storage.delete(profile_image_url)
        logger.warning("Registration of %s rolled back", email)
        raise

    await db.refresh(user)
    logger.info("Registered user %s (verified=%s)", user.id, user.is_verified)
    return user, code


async def verify_account(db: AsyncSession, email: str, submitted_code: str) -> User:
    user = await get_user_by_email(db, email.strip())
    if not user:
        raise NotFoundError("User not found")

    # 이미 인증된 계정은 코드가 비워져 있으므로 항상 실패
    if user.verification_code is None or user.verification_code != submitted_code:
        raise ValidationError("Invalid verification code")

    user.is_verified = True
    user.verification_code = None
    await commit_or_raise(db)
    logger.info("Verified user %s", user.id)
    return user


async def resend_verification_code(db: AsyncSession, mailer: EmailSender, email: str) -> tuple[User, str]:
    user = await get_user_by_email(db, email.strip())
    if not user:
        raise NotFoundError("User not found")
    if user.is_verified:
        raise ValidationError("Account already verified")

    code = generate_verification_code()
    user.verification_code = code
    await commit_or_raise(db)
    await send_verification_code(mailer, user.email, user.name, code)
    logger.info("Resent verification code to user %s", user.id)
    return user, code


async def authenticate(db: AsyncSession, email: str, password: str) -> tuple[str, User]:
    user = await get_user_by_email(db, email.strip())
    if not user:
        logger.warning("Login failed: unknown email")
        raise NotFoundError("User not found")

    if settings.EMAIL_VERIFICATION_ENABLED and not user.is_verified:
        logger.warning("Login refused for unverified user %s", user.id)
        raise ForbiddenError("Account not verified")

    if not verify_password(password, user.password):
        logger.warning("Login failed: bad password for user %s", user.id)
        raise UnauthorizedError("Invalid password")

    logger.info("User %s logged in", user.id)
    return create_user_token(user), user
