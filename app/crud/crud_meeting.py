from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.crud.crud_base import commit_or_raise, execute_or_raise
from app.models import Meeting, Participant


def _meeting_query():
    return select(Meeting).options(
        selectinload(Meeting.creator),
        selectinload(Meeting.participants).selectinload(Participant.user),
    ).execution_options(populate_existing=True)


async def get_meeting(db: AsyncSession, meeting_id: UUID) -> Optional[Meeting]:
    result = await execute_or_raise(db, _meeting_query().where(Meeting.id == meeting_id))
    return result.scalar_one_or_none()


async def get_all_meetings(db: AsyncSession) -> list[Meeting]:
    result = await execute_or_raise(db, _meeting_query().order_by(Meeting.s_date))
    return list(result.scalars().all())


# 본인이 만들었거나 참석자로 등록된 회의
async def get_meetings_for_user(db: AsyncSession, user_id: UUID) -> list[Meeting]:
    participant_meetings = select(Participant.meeting_id).where(Participant.user_id == user_id)
    stmt = (
        _meeting_query()
        .where(or_(Meeting.created_by == user_id, Meeting.id.in_(participant_meetings)))
        .order_by(Meeting.s_date)
    )
    result = await execute_or_raise(db, stmt)
    return list(result.scalars().all())


# meeting 저장 함수
async def insert_meeting(
    db: AsyncSession,
    room_name: str,
    s_date: datetime,
    created_by: UUID,
    e_date: Optional[datetime] = None,
) -> Meeting:
    meeting = Meeting(
        room_name=room_name,
        s_date=s_date,
        e_date=e_date,
        created_by=created_by,
    )
    db.add(meeting)
    await commit_or_raise(db)
    return await get_meeting(db, meeting.id)


async def update_meeting(db: AsyncSession, meeting: Meeting, update_data: dict) -> Meeting:
    for key, value in update_data.items():
        setattr(meeting, key, value)
    await commit_or_raise(db)
    return await get_meeting(db, meeting.id)


async def delete_meeting(db: AsyncSession, meeting: Meeting) -> None:
    # participants 는 cascade 로 함께 삭제 (get_meeting 에서 미리 로드됨)
    await db.delete(meeting)
    await commit_or_raise(db)
