"""
분개 라우트

분개 제출, 승인, 반려, 재전기 및 조회 API
"""

from fastapi import APIRouter, Depends, Query

from core.ledger.service import LedgerService
from web.dependencies import get_acting_user, get_service, get_write_service
from web.models.requests import JournalEntryCreateRequest, JournalRejectRequest
from web.models.responses import (
    JournalEntryListResponse,
    JournalEntryResponse,
    NotificationResponse,
)

router = APIRouter(prefix="/api", tags=["Journal"])


@router.post("/journal-entries", response_model=JournalEntryResponse, status_code=201)
async def submit_entry(
    request: JournalEntryCreateRequest,
    service: LedgerService = Depends(get_write_service),
    acting_user: str = Depends(get_acting_user),
) -> JournalEntryResponse:
    """분개 제출

    검증 실패 시 400과 첫 번째 위반 규칙 메시지 반환.
    통과 시 pending 상태로 저장되고 매니저에게 승인 요청 알림.
    """
    document = {
        "date": request.date,
        "description": request.description,
        "lines": [line.model_dump() for line in request.lines],
    }
    entry = await service.submit_entry(document, acting_user)
    return JournalEntryResponse.from_entry(entry)


@router.get("/journal-entries", response_model=JournalEntryListResponse)
async def list_entries(
    status: str | None = Query(default=None, description="상태 필터 (pending/approved/rejected/all)"),
    from_date: str | None = Query(default=None, alias="from", description="시작일 (포함)"),
    to_date: str | None = Query(default=None, alias="to", description="종료일 (포함)"),
    search: str | None = Query(default=None, description="적요, 계정명, 금액 검색"),
    service: LedgerService = Depends(get_service),
) -> JournalEntryListResponse:
    """분개 목록 조회 (최신 생성순)"""
    entries = await service.list_entries(
        status=status,
        from_=from_date,
        to=to_date,
        search=search,
    )
    return JournalEntryListResponse(
        entries=[JournalEntryResponse.from_entry(e) for e in entries],
        total=len(entries),
    )


@router.get("/journal-entries/{entry_id}", response_model=JournalEntryResponse)
async def get_entry(
    entry_id: str,
    service: LedgerService = Depends(get_service),
) -> JournalEntryResponse:
    """분개 단건 조회"""
    entry = await service.get_entry(entry_id)
    return JournalEntryResponse.from_entry(entry)


@router.post("/journal-entries/{entry_id}/approve", response_model=JournalEntryResponse)
async def approve_entry(
    entry_id: str,
    service: LedgerService = Depends(get_write_service),
    acting_user: str = Depends(get_acting_user),
) -> JournalEntryResponse:
    """분개 승인 및 원장 전기"""
    entry = await service.approve_entry(entry_id, acting_user)
    return JournalEntryResponse.from_entry(entry)


@router.post("/journal-entries/{entry_id}/reject", response_model=JournalEntryResponse)
async def reject_entry(
    entry_id: str,
    request: JournalRejectRequest,
    service: LedgerService = Depends(get_write_service),
    acting_user: str = Depends(get_acting_user),
) -> JournalEntryResponse:
    """분개 반려"""
    entry = await service.reject_entry(entry_id, acting_user, reason=request.reason)
    return JournalEntryResponse.from_entry(entry)


@router.post("/journal-entries/{entry_id}/retry-posting")
async def retry_posting(
    entry_id: str,
    service: LedgerService = Depends(get_write_service),
    acting_user: str = Depends(get_acting_user),
) -> dict:
    """전기가 끝나지 않은 승인 분개 재전기"""
    result = await service.retry_posting(entry_id, acting_user)
    return {
        "journal_id": result.journal_id,
        "inserted": result.inserted,
        "skipped": result.skipped,
    }


@router.get("/notifications", response_model=list[NotificationResponse])
async def list_notifications(
    recipient: str | None = Query(default=None, description="수신자 (이메일 또는 역할)"),
    service: LedgerService = Depends(get_service),
) -> list[NotificationResponse]:
    """알림함 조회"""
    notifications = await service.list_notifications(recipient)
    return [NotificationResponse.from_notification(n) for n in notifications]
