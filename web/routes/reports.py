"""
재무제표 라우트

GET /api/reports/trial-balance      - 시산표
GET /api/reports/income-statement   - 손익계산서
GET /api/reports/balance-sheet      - 재무상태표
GET /api/reports/retained-earnings  - 이익잉여금 계산서

모든 보고서는 조회 시점에 원장 라인으로부터 다시 계산 (저장하지 않음).
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from core.config.loader import Settings
from core.ledger.service import LedgerService
from core.ledger.statements import serialize_report
from web.dependencies import get_app_settings, get_service
from web.models.responses import ReportResponse

router = APIRouter(prefix="/api/reports", tags=["Reports"])


def _response(
    settings: Settings,
    name: str,
    report: Any,
    from_date: str | None,
    to_date: str | None,
) -> ReportResponse:
    return ReportResponse(
        company=settings.company,
        report=name,
        from_date=from_date,
        to_date=to_date,
        data=serialize_report(report),
    )


@router.get("/trial-balance", response_model=ReportResponse)
async def get_trial_balance(
    from_date: str | None = Query(default=None, alias="from", description="시작일 (포함)"),
    to_date: str | None = Query(default=None, alias="to", description="종료일 (포함)"),
    service: LedgerService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
) -> ReportResponse:
    """시산표 (is_balanced=False면 전기/검증 결함 신호)"""
    report = await service.get_trial_balance(from_date, to_date)
    return _response(settings, "trial_balance", report, from_date, to_date)


@router.get("/income-statement", response_model=ReportResponse)
async def get_income_statement(
    from_date: str | None = Query(default=None, alias="from", description="시작일 (포함)"),
    to_date: str | None = Query(default=None, alias="to", description="종료일 (포함)"),
    service: LedgerService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
) -> ReportResponse:
    """손익계산서"""
    report = await service.get_income_statement(from_date, to_date)
    return _response(settings, "income_statement", report, from_date, to_date)


@router.get("/balance-sheet", response_model=ReportResponse)
async def get_balance_sheet(
    from_date: str | None = Query(default=None, alias="from", description="시작일 (포함)"),
    to_date: str | None = Query(default=None, alias="to", description="종료일 (포함)"),
    service: LedgerService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
) -> ReportResponse:
    """재무상태표"""
    report = await service.get_balance_sheet(from_date, to_date)
    return _response(settings, "balance_sheet", report, from_date, to_date)


@router.get("/retained-earnings", response_model=ReportResponse)
async def get_retained_earnings(
    from_date: str | None = Query(default=None, alias="from", description="시작일 (포함)"),
    to_date: str | None = Query(default=None, alias="to", description="종료일 (포함)"),
    service: LedgerService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
) -> ReportResponse:
    """이익잉여금 계산서 (배당은 0)"""
    report = await service.get_retained_earnings_statement(from_date, to_date)
    return _response(settings, "retained_earnings", report, from_date, to_date)
