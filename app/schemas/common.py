from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # DB 컬럼은 TIMESTAMP (timezone 없음) 이므로 UTC 기준 naive 로 저장
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
