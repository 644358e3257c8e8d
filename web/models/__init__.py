"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AccountCreateRequest,
    AccountUpdateRequest,
    JournalEntryCreateRequest,
    JournalLineRequest,
    JournalRejectRequest,
)
from web.models.responses import (
    AccountLedgerResponse,
    AccountResponse,
    HealthResponse,
    JournalEntryListResponse,
    JournalEntryResponse,
    JournalLineResponse,
    LedgerRowResponse,
    NotificationResponse,
    ReportResponse,
)

__all__ = [
    # Requests
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "JournalEntryCreateRequest",
    "JournalLineRequest",
    "JournalRejectRequest",
    # Responses
    "AccountLedgerResponse",
    "AccountResponse",
    "HealthResponse",
    "JournalEntryListResponse",
    "JournalEntryResponse",
    "JournalLineResponse",
    "LedgerRowResponse",
    "NotificationResponse",
    "ReportResponse",
]
