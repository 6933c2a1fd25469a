from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from app.core.config import settings

engine_options = {"echo": settings.LOG_LEVEL == "DEBUG"}
if not settings.CONNECTION_STRING.startswith("sqlite"):
    engine_options.update(pool_recycle=1800, pool_pre_ping=True)

engine = create_async_engine(settings.CONNECTION_STRING, **engine_options)

AsyncSessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

async def get_db_session():
    async with AsyncSessionLocal() as session:
        yield session

async def create_db_and_tables():
    # 마이그레이션 없이 개발용으로 테이블 생성 (AUTO_CREATE_TABLES)
    from app.models.base import Base
    import app.models  # noqa: F401  모델 등록

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
