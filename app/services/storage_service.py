import logging
import os
import secrets
import time
from functools import lru_cache

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from app.core.config import settings
from app.core.errors import InternalError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
CHUNK_SIZE = 1024 * 1024


class LocalFileStorage:
    """프로필 이미지를 로컬 디렉터리에 저장하고 조회 URL을 반환합니다."""

    def __init__(self, upload_dir: str):
        self.upload_dir = upload_dir

    def make_filename(self) -> str:
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}.jpg"

    async def save(self, file: UploadFile) -> str:
        filename = self.make_filename()
        path = os.path.join(self.upload_dir, filename)

        await file.seek(0)
        try:
            os.makedirs(self.upload_dir, exist_ok=True)
            async with aiofiles.open(path, "wb") as out:
                while chunk := await file.read(CHUNK_SIZE):
                    await out.write(chunk)
        except OSError as e:
            logger.exception("Failed to store upload %s", file.filename)
            raise InternalError(f"Failed to store file: {e}") from e

        return f"{UPLOAD_URL_PREFIX}/{filename}"

    async def delete(self, url: str) -> None:
        # 저장 후 트랜잭션이 실패한 경우 남은 파일 정리
        path = os.path.join(self.upload_dir, os.path.basename(url))
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        logger.info("Removed stored upload %s", url)


@lru_cache
def get_file_storage() -> LocalFileStorage:
    return LocalFileStorage(settings.UPLOAD_DIR)
