# routers/user.py
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, parse_id
from app.core.errors import ConflictError, NotFoundError
from app.core.security import get_password_hash
from app.crud.crud_user import EMAIL_EXISTS, delete_user, get_all_users, get_user_by_email, get_user_by_id, update_user
from app.db.db_session import get_db_session
from app.schemas.auth import TokenPayload
from app.schemas.user import MessageResponse, UserOut
from app.services.policy_service.access_policy import Action, authorize
from app.services.signup_service.account import normalize_email
from app.services.storage_service import LocalFileStorage, get_file_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[UserOut])
async def read_users(
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    authorize(token_user, Action.READ_ALL_USERS, detail="Admin access only")
    return await get_all_users(db)


@router.put("/{user_id}", response_model=UserOut)
async def edit_user(
    user_id: str,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    role: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None),
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    storage: LocalFileStorage = Depends(get_file_storage),
):
    user = await get_user_by_id(db, parse_id(user_id, "User not found"))
    if not user:
        raise NotFoundError("User not found")
    authorize(token_user, Action.UPDATE_USER, user)

    # 빈 값은 기존 값 유지
    update_data = {}
    if name and name.strip():
        update_data["name"] = name.strip()
    if email and email.strip():
        new_email = normalize_email(email)
        if new_email != user.email:
            if await get_user_by_email(db, new_email):
                raise ConflictError(EMAIL_EXISTS)
            update_data["email"] = new_email
    if password and password.strip():
        update_data["password"] = get_password_hash(password)
    if role and role.strip():
        update_data["role"] = role.strip()
    stored_url = None
    if profile_image is not None and profile_image.filename:
        stored_url = await storage.save(profile_image)
        update_data["profile_image_url"] = stored_url

    try:
        user = await update_user(db, user, update_data)
    except Exception:
        # 커밋 실패 시 새로 저장한 이미지 삭제
        if stored_url:
            await storage.delete(stored_url)
        raise
    logger.info("User %s updated by %s (fields: %s)", user.id, token_user.id, sorted(update_data))
    return user


@router.delete("/{user_id}", response_model=MessageResponse)
async def remove_user(
    user_id: str,
    token_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    user = await get_user_by_id(db, parse_id(user_id, "User not found"))
    if not user:
        raise NotFoundError("User not found")
    authorize(token_user, Action.DELETE_USER, user)

    await delete_user(db, user)
    logger.info("User %s deleted by %s", user_id, token_user.id)
    return {"message": "User deleted successfully"}
