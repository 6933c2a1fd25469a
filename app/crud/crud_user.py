from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.crud.crud_base import commit_or_raise, execute_or_raise, flush_or_raise
from app.models import User, Meeting

EMAIL_EXISTS = "Email already exists"


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> Optional[User]:
    result = await execute_or_raise(db, select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await execute_or_raise(db, select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_all_users(db: AsyncSession) -> list[User]:
    result = await execute_or_raise(db, select(User).order_by(User.created_at))
    return list(result.scalars().all())


async def create_user(db: AsyncSession, **fields) -> User:
    db_user = User(**fields)
    db.add(db_user)
    await commit_or_raise(db, EMAIL_EXISTS)
    await db.refresh(db_user)
    return db_user


async def add_user(db: AsyncSession, **fields) -> User:
    db_user = User(**fields)
    db.add(db_user)
    await flush_or_raise(db, EMAIL_EXISTS)
    return db_user


async def update_user(db: AsyncSession, user: User, update_data: dict) -> User:
    for key, value in update_data.items():
        setattr(user, key, value)
    await commit_or_raise(db, EMAIL_EXISTS)
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    # 생성한 회의(및 그 참석자)와 본인 참석 기록까지 함께 삭제
    stmt = (
        select(User)
        .options(
            selectinload(User.meetings).selectinload(Meeting.participants),
            selectinload(User.participations),
        )
        .where(User.id == user.id)
        .execution_options(populate_existing=True)
    )
    result = await execute_or_raise(db, stmt)
    loaded = result.scalar_one()
    await db.delete(loaded)
    await commit_or_raise(db)
