"""
타임존 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼 함수
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """naive datetime을 UTC로 간주하여 타임존 부여

    Args:
        dt: datetime 객체

    Returns:
        UTC 타임존의 datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_utc(dt: datetime, fmt: str = "%Y-%m-%d %H:%M:%S UTC") -> str:
    """UTC 문자열로 포맷

    Example:
        >>> format_utc(datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc))
        '2026-03-01 09:30:00 UTC'
    """
    return ensure_utc(dt).strftime(fmt)
