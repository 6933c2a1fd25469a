import os
import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv
load_dotenv()
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.security import get_password_hash
from app.crud.crud_user import create_user, get_user_by_email
from app.db.db_session import AsyncSessionLocal, create_db_and_tables
from app.models import UserRole

# 로깅 설정
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def create_default_admin():
    """ADMIN_EMAIL / ADMIN_PASSWORD 가 설정된 경우 인증된 관리자 계정을 만듭니다."""
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return
    async with AsyncSessionLocal() as db:
        if await get_user_by_email(db, settings.ADMIN_EMAIL):
            return
        await create_user(
            db,
            name=settings.ADMIN_NAME,
            email=settings.ADMIN_EMAIL,
            password=get_password_hash(settings.ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            is_verified=True,
        )
        logger.info("Default admin account created")


# 앱 시작 시 테이블 생성 및 기본 관리자 계정 생성
@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await create_db_and_tables()
    await create_default_admin()
    yield


def create_app() -> FastAPI:
    app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    # 프로필 이미지 제공
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    @app.get("/")
    def read_root():
        return {"message": "Meeting Scheduler API running"}

    return app


app = create_app()
