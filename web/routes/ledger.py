"""
계정 원장 라우트

계정별 원장 라인과 라인별 누적 잔액 조회 API
"""

from fastapi import APIRouter, Depends, Query

from core.ledger.service import LedgerService
from web.dependencies import get_service
from web.models.responses import AccountLedgerResponse, AccountResponse, LedgerRowResponse

router = APIRouter(prefix="/api/ledger", tags=["Ledger"])


@router.get("/{account_id}", response_model=AccountLedgerResponse)
async def get_account_ledger(
    account_id: str,
    from_date: str | None = Query(default=None, alias="from", description="시작일 (포함)"),
    to_date: str | None = Query(default=None, alias="to", description="종료일 (포함)"),
    search: str | None = Query(default=None, description="적요, 전기자, 분개 ID, 금액 검색"),
    service: LedgerService = Depends(get_service),
) -> AccountLedgerResponse:
    """계정 원장 조회

    기초 잔액부터 시간순으로 누적. 잘못된 기간은 무제한으로 처리.
    """
    account = await service.get_account(account_id)
    rows = await service.get_account_ledger(account_id, from_date, to_date, search)

    ending = rows[-1].balance if rows else account.initial_balance
    return AccountLedgerResponse(
        account=AccountResponse.from_account(account),
        rows=[LedgerRowResponse.from_row(row) for row in rows],
        ending_balance=str(ending),
    )
