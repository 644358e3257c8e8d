"""
유틸리티 패키지

원장 라인 멱등성 키, 타임존 처리 등 공통 유틸리티
"""

from core.utils.idempotency import make_posting_key, parse_posting_key
from core.utils.timezone import ensure_utc, format_utc, now_utc

__all__ = [
    "make_posting_key",
    "parse_posting_key",
    "ensure_utc",
    "format_utc",
    "now_utc",
]
