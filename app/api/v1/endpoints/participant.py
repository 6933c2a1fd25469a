# routers/participant.py
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, parse_id
from app.core.errors import NotFoundError, ValidationError
from app.crud import crud_participant
from app.crud.crud_meeting import get_meeting
from app.crud.crud_user import get_user_by_id
from app.db.db_session import get_db_session
from app.schemas.auth import TokenPayload
from app.schemas.participant import ParticipantCreate, ParticipantResponse, ParticipantUpdate
from app.schemas.user import MessageResponse
from app.services.policy_service.access_policy import Action, authorize

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_participant_or_404(db: AsyncSession, participant_id: str):
    participant = await crud_participant.get_participant(db, parse_id(participant_id, "Participant not found"))
    if not participant:
        raise NotFoundError("Participant not found")
    return participant


@router.post("", response_model=ParticipantResponse, status_code=status.HTTP_201_CREATED)
async def add_participant(
    body: ParticipantCreate,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    if not body.role.strip():
        raise ValidationError("meeting_id, user_id and role are required")

    meeting = await get_meeting(db, parse_id(body.meeting_id, "Meeting not found"))
    if not meeting:
        raise NotFoundError("Meeting not found")
    user = await get_user_by_id(db, parse_id(body.user_id, "User not found"))
    if not user:
        raise NotFoundError("User not found")
    authorize(token_user, Action.ADD_PARTICIPANT, meeting)

    participant = await crud_participant.insert_participant(
        db,
        meeting_id=meeting.id,
        user_id=user.id,
        role=body.role.strip(),
        joined_at=body.joined_at,
        left_at=body.left_at,
    )
    logger.info("Participant %s added to meeting %s by %s", participant.id, meeting.id, token_user.id)
    return participant


@router.get("/{participant_id}", response_model=ParticipantResponse)
async def read_participant(
    participant_id: str,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    return await get_participant_or_404(db, participant_id)


@router.put("/{participant_id}", response_model=ParticipantResponse)
async def edit_participant(
    participant_id: str,
    body: ParticipantUpdate,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    participant = await get_participant_or_404(db, participant_id)
    authorize(token_user, Action.UPDATE_PARTICIPANT, participant)

    update_data = body.model_dump(exclude_unset=True, exclude_none=True)
    if "role" in update_data:
        update_data["role"] = update_data["role"].strip()
        if not update_data["role"]:
            del update_data["role"]

    participant = await crud_participant.update_participant(db, participant, update_data)
    logger.info("Participant %s updated by %s", participant.id, token_user.id)
    return participant


@router.delete("/{participant_id}", response_model=MessageResponse)
async def remove_participant(
    participant_id: str,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    participant = await get_participant_or_404(db, participant_id)
    authorize(token_user, Action.DELETE_PARTICIPANT, participant)

    await crud_participant.delete_participant(db, participant)
    logger.info("Participant %s deleted by %s", participant_id, token_user.id)
    return {"message": "Participant deleted successfully"}
