# routers/meeting.py
import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, parse_id
from app.core.errors import NotFoundError, ValidationError
from app.crud import crud_meeting
from app.crud.crud_user import get_user_by_id
from app.db.db_session import get_db_session
from app.schemas.auth import TokenPayload
from app.schemas.meeting import (
    MeetingCreate,
    MeetingDetailResponse,
    MeetingEndDateUpdate,
    MeetingResponse,
    MeetingUpdate,
)
from app.schemas.user import MessageResponse
from app.services.meeting_service.room_name import generate_room_name
from app.services.policy_service.access_policy import Action, authorize, is_admin

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_meeting_or_404(db: AsyncSession, meeting_id: str):
    meeting = await crud_meeting.get_meeting(db, parse_id(meeting_id, "Meeting not found"))
    if not meeting:
        raise NotFoundError("Meeting not found")
    return meeting


@router.post("", response_model=MeetingResponse, status_code=status.HTTP_201_CREATED)
async def create_meeting(
    body: MeetingCreate,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    if not body.base_room_name.strip():
        raise ValidationError("base_room_name is required")
    authorize(token_user, Action.CREATE_MEETING)

    # 생성자는 항상 토큰의 사용자
    creator = await get_user_by_id(db, token_user.id)
    if not creator:
        raise NotFoundError("Creator user not found")

    meeting = await crud_meeting.insert_meeting(
        db,
        room_name=generate_room_name(body.base_room_name),
        s_date=body.s_date,
        e_date=body.e_date,
        created_by=creator.id,
    )
    logger.info("Meeting %s created by %s", meeting.id, creator.id)
    return meeting


@router.get("", response_model=List[MeetingResponse])
async def read_meetings(
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    if is_admin(token_user):
        return await crud_meeting.get_all_meetings(db)
    return await crud_meeting.get_meetings_for_user(db, token_user.id)


@router.get("/{meeting_id}", response_model=MeetingDetailResponse)
async def read_meeting(
    meeting_id: str,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    return await get_meeting_or_404(db, meeting_id)


@router.put("/{meeting_id}", response_model=MeetingResponse)
async def edit_meeting(
    meeting_id: str,
    body: MeetingUpdate,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    meeting = await get_meeting_or_404(db, meeting_id)
    authorize(token_user, Action.UPDATE_MEETING, meeting)

    update_data = body.model_dump(exclude_unset=True, exclude_none=True)
    if "room_name" in update_data:
        update_data["room_name"] = update_data["room_name"].strip()
        if not update_data["room_name"]:
            del update_data["room_name"]

    meeting = await crud_meeting.update_meeting(db, meeting, update_data)
    logger.info("Meeting %s updated by %s", meeting.id, token_user.id)
    return meeting


@router.patch("/{meeting_id}/end-date", response_model=MeetingResponse)
async def set_meeting_end_date(
    meeting_id: str,
    body: MeetingEndDateUpdate,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    meeting = await get_meeting_or_404(db, meeting_id)
    authorize(token_user, Action.UPDATE_MEETING, meeting)

    # e_date < s_date 는 검증하지 않음
    meeting = await crud_meeting.update_meeting(db, meeting, {"e_date": body.e_date})
    logger.info("Meeting %s end date set by %s", meeting.id, token_user.id)
    return meeting


@router.delete("/{meeting_id}", response_model=MessageResponse)
async def remove_meeting(
    meeting_id: str,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    meeting = await get_meeting_or_404(db, meeting_id)
    authorize(token_user, Action.DELETE_MEETING, meeting)

    await crud_meeting.delete_meeting(db, meeting)
    logger.info("Meeting %s deleted by %s", meeting_id, token_user.id)
    return {"message": "Meeting deleted successfully"}
