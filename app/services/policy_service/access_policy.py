# 누가 어떤 레코드에 어떤 작업을 할 수 있는지 판단
# can_act 는 속성(id, role, created_by, user_id, meeting)만 읽으므로 ORM 객체, TokenPayload 모두 사용 가능
# 호출 전에 레코드 존재 여부를 먼저 확인할 것 (없으면 권한과 무관하게 NotFoundError)
import logging
from enum import Enum

from app.core.errors import ForbiddenError
from app.models.user import UserRole

logger = logging.getLogger(__name__)


class Action(str, Enum):
    READ_ALL_USERS = "read_all_users"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"
    CREATE_MEETING = "create_meeting"
    UPDATE_MEETING = "update_meeting"
    DELETE_MEETING = "delete_meeting"
    ADD_PARTICIPANT = "add_participant"
    UPDATE_PARTICIPANT = "update_participant"
    DELETE_PARTICIPANT = "delete_participant"


def _same_id(a, b) -> bool:
    # 토큰 claim 은 문자열, ORM 값은 UUID
    return a is not None and b is not None and str(a) == str(b)


def is_admin(actor) -> bool:
    return actor is not None and getattr(actor, "role", None) == UserRole.ADMIN


def _is_meeting_owner(actor, meeting) -> bool:
    return meeting is not None and _same_id(actor.id, meeting.created_by)


def can_act(actor, action: Action, resource=None) -> bool:
    if actor is None:
        return False

    if action == Action.READ_ALL_USERS:
        return is_admin(actor)

    if action == Action.CREATE_MEETING:
        return True

    if is_admin(actor):
        return True

    if action in (Action.UPDATE_USER, Action.DELETE_USER):
        return _same_id(actor.id, resource.id)

    if action in (Action.UPDATE_MEETING, Action.DELETE_MEETING, Action.ADD_PARTICIPANT):
        return _is_meeting_owner(actor, resource)

    if action in (Action.UPDATE_PARTICIPANT, Action.DELETE_PARTICIPANT):
        return _is_meeting_owner(actor, resource.meeting) or _same_id(actor.id, resource.user_id)

    return False


def authorize(actor, action: Action, resource=None, detail: str | None = None) -> None:
    if not can_act(actor, action, resource):
        logger.warning(
            "Denied %s for actor %s on %s",
            action.value,
            getattr(actor, "id", None),
            getattr(resource, "id", None),
        )
        raise ForbiddenError(detail or "You are not allowed to perform this action")
