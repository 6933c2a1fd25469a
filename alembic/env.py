from logging.config import fileConfig
import asyncio
from sqlalchemy import engine_from_config, pool
from sqlalchemy.ext.asyncio import AsyncEngine
from alembic import context

from app.core.config import settings
from app.models.base import Base
from app.models import user, meeting, participant  # noqa: F401  모델 등록

# Alembic 설정 객체
config = context.config

# CONNECTION_STRING (postgresql+asyncpg:// 로 변환된 값) 사용
config.set_main_option("sqlalchemy.url", settings.CONNECTION_STRING)

# logging 설정 적용
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# metadata 대상 설정
target_metadata = Base.metadata


# 오프라인 마이그레이션
def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


# 동기 컨텍스트에서 실행되는 마이그레이션 로직
def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """
    비동기 엔진을 사용하여 데이터베이스 연결을 얻고 마이그레이션을 실행합니다.
    """
    connectable = AsyncEngine(
        engine_from_config(
            config.get_section(config.config_ini_section, {}),
            prefix="sqlalchemy.",
            poolclass=pool.NullPool,
        )
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


# 온라인 마이그레이션 (비동기 함수를 호출)
def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


# 실행 분기
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
