"""
시간 관련 유틸리티
모든 타임스탬프는 naive UTC로 저장
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """현재 시각 (naive UTC)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """타임존 정보가 있으면 UTC로 변환 후 tzinfo 제거"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
