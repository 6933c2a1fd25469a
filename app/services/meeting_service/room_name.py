import secrets
import string

ROOM_SUFFIX_LENGTH = 8
ROOM_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def generate_room_name(base: str) -> str:
    # base 뒤에 8자리 랜덤 접미사 (중복 여부는 확인하지 않음)
    suffix = "".join(secrets.choice(ROOM_SUFFIX_ALPHABET) for _ in range(ROOM_SUFFIX_LENGTH))
    return f"{base.strip()}-{suffix}"
