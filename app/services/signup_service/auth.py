import logging
from datetime import datetime, timedelta

from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.errors import ForbiddenError
from app.schemas.auth import TokenPayload

logger = logging.getLogger(__name__)


# 토큰 생성 함수
def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user) -> str:
    claims = {
        "sub": str(user.id),
        "id": str(user.id),
        "email": user.email,
        "role": user.role,
    }
    return create_access_token(claims)


# 엑세스 토큰 해독 함수
def verify_access_token(token: str) -> TokenPayload:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise ForbiddenError("Token has expired")
    except JWTError:
        raise ForbiddenError("Invalid token")

    if not payload.get("id") or not payload.get("email") or payload.get("role") is None:
        raise ForbiddenError("Invalid token: missing claims")

    try:
        return TokenPayload(id=payload["id"], email=payload["email"], role=payload["role"])
    except PydanticValidationError:
        raise ForbiddenError("Invalid token: malformed claims")
