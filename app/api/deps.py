from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import NotFoundError, UnauthorizedError
from app.schemas.auth import TokenPayload
from app.services.signup_service.auth import verify_access_token

bearer_scheme = HTTPBearer(auto_error=False)


# 토큰에서 사용자 정보(id, email, role) 추출하는 의존성 함수
async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenPayload:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authorization token is missing")
    return verify_access_token(credentials.credentials)


# UUID 형식이 아닌 id 는 존재하지 않는 레코드로 취급
def parse_id(value: str, not_found_detail: str) -> UUID:
    try:
        return UUID(str(value).strip())
    except ValueError:
        raise NotFoundError(not_found_detail)
