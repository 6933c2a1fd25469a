import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, InternalError

logger = logging.getLogger(__name__)


async def commit_or_raise(db: AsyncSession, conflict_detail: str = "Resource already exists") -> None:
    """커밋 실패를 에러 분류(ConflictError / InternalError)로 변환합니다."""
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("Integrity error on commit: %s", e.orig)
        raise ConflictError(conflict_detail) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Database error on commit")
        raise InternalError(str(e)) from e


async def flush_or_raise(db: AsyncSession, conflict_detail: str = "Resource already exists") -> None:
    # 커밋 없이 INSERT/UPDATE 만 반영 (트랜잭션은 호출자가 마무리)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("Integrity error on flush: %s", e.orig)
        raise ConflictError(conflict_detail) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Database error on flush")
        raise InternalError(str(e)) from e


async def execute_or_raise(db: AsyncSession, stmt):
    try:
        return await db.execute(stmt)
    except SQLAlchemyError as e:
        logger.exception("Database error on query")
        raise InternalError(str(e)) from e
