from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.crud.crud_base import commit_or_raise, execute_or_raise
from app.models import Participant


async def get_participant(db: AsyncSession, participant_id: UUID) -> Optional[Participant]:
    stmt = (
        select(Participant)
        .options(selectinload(Participant.user), selectinload(Participant.meeting))
        .where(Participant.id == participant_id)
        .execution_options(populate_existing=True)
    )
    result = await execute_or_raise(db, stmt)
    return result.scalar_one_or_none()


#회의 참석자 저장 함수
async def insert_participant(
    db: AsyncSession,
    meeting_id: UUID,
    user_id: UUID,
    role: str,
    joined_at: Optional[datetime] = None,
    left_at: Optional[datetime] = None,
) -> Participant:
    participant = Participant(
        meeting_id=meeting_id,
        user_id=user_id,
        role=role,
        joined_at=joined_at,
        left_at=left_at,
    )
    db.add(participant)
    await commit_or_raise(db)
    return await get_participant(db, participant.id)


async def update_participant(db: AsyncSession, participant: Participant, update_data: dict) -> Participant:
    for key, value in update_data.items():
        setattr(participant, key, value)
    await commit_or_raise(db)
    return await get_participant(db, participant.id)


async def delete_participant(db: AsyncSession, participant: Participant) -> None:
    await db.delete(participant)
    await commit_or_raise(db)
