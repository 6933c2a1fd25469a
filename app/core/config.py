import os
import secrets
import logging
from dotenv import load_dotenv

# .env 파일 로드
load_dotenv()

logger = logging.getLogger(__name__)


def getenv_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value.lower() in ("1", "true", "yes", "on")


class Settings:
    PROJECT_NAME: str = "Meeting Scheduler API"
    VERSION: str = "0.1.0"

    # 비동기 데이터베이스 연결 문자열
    CONNECTION_STRING: str = (
        os.getenv("CONNECTION_STRING") or "sqlite+aiosqlite:///./meetings.db"
    ).replace("postgresql://", "postgresql+asyncpg://")
    AUTO_CREATE_TABLES: bool = getenv_bool("AUTO_CREATE_TABLES", False)

    SECRET_KEY: str = os.getenv("SECRET_KEY") or ""
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    EMAIL_VERIFICATION_ENABLED: bool = getenv_bool("EMAIL_VERIFICATION_ENABLED", True)
    EXPOSE_VERIFICATION_CODE: bool = getenv_bool("EXPOSE_VERIFICATION_CODE", True)
    OTP_LENGTH: int = int(os.getenv("OTP_LENGTH", "6"))

    MAIL_USERNAME: str = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD: str = os.getenv("MAIL_PASSWORD", "")
    MAIL_FROM: str = os.getenv("MAIL_FROM") or "noreply@example.com"
    MAIL_PORT: int = int(os.getenv("MAIL_PORT", "587"))
    MAIL_SERVER: str = os.getenv("MAIL_SERVER", "localhost")
    MAIL_STARTTLS: bool = getenv_bool("MAIL_STARTTLS", True)
    MAIL_SSL_TLS: bool = getenv_bool("MAIL_SSL_TLS", False)
    MAIL_SUPPRESS_SEND: bool = getenv_bool("MAIL_SUPPRESS_SEND", False)

    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")

    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
        if origin.strip()
    ]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # 시작 시 관리자 계정 생성 (선택)
    ADMIN_EMAIL: str | None = os.getenv("ADMIN_EMAIL")
    ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD")
    ADMIN_NAME: str = os.getenv("ADMIN_NAME", "admin")


settings = Settings()

if not settings.SECRET_KEY:
    # 재시작하면 기존 토큰은 모두 무효화됨
    logger.warning("SECRET_KEY is not set; using a random per-process signing key")
    settings.SECRET_KEY = secrets.token_urlsafe(32)
