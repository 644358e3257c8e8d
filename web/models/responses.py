"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화

금액은 모두 소수점 2자리 문자열 (Money 경계).
"""

from typing import Any

from pydantic import BaseModel, Field

from core.domain.events import Notification
from core.ledger.accounts import Account
from core.ledger.balances import RunningBalanceRow
from core.ledger.journal import JournalEntry


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    mode: str = Field(..., description="장부 모드 (production/sandbox)")
    company: str = Field(..., description="회사명")
    version: str = Field(..., description="API 버전")


class AccountResponse(BaseModel):
    """계정 응답"""

    id: str = Field(..., description="계정 ID")
    name: str = Field(..., description="계정명")
    number: str = Field(..., description="계정번호")
    category: str = Field(..., description="계정 분류")
    subcategory: str = Field(..., description="세부 분류")
    normal_side: str | None = Field(default=None, description="정상 잔액 방향")
    initial_balance: str = Field(..., description="기초 잔액")
    active: bool = Field(..., description="활성 여부")
    description: str = Field(default="", description="설명")
    statement: str = Field(default="BS", description="표시 보고서")
    order: str = Field(default="01", description="표시 순서")
    comment: str = Field(default="", description="비고")
    created_by: str | None = Field(default=None, description="등록자")

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(**account.to_dict())


class JournalLineResponse(BaseModel):
    """분개 라인 응답"""

    account_id: str | None = Field(default=None, description="계정 ID")
    account_name: str = Field(default="", description="계정명 (작성 시점)")
    amount: str = Field(..., description="금액")
    side: str = Field(..., description="debit/credit")


class JournalEntryResponse(BaseModel):
    """분개 응답"""

    id: str = Field(..., description="분개 ID")
    date: str | None = Field(default=None, description="분개 일자")
    description: str = Field(..., description="적요")
    lines: list[JournalLineResponse] = Field(default_factory=list, description="분개 라인")
    total_debits: str = Field(..., description="차변 합계")
    total_credits: str = Field(..., description="대변 합계")
    status: str = Field(..., description="상태 (pending/approved/rejected)")
    prepared_by: str | None = Field(default=None, description="작성자")
    created_at: str | None = Field(default=None, description="작성 시각")
    approved_by: str | None = Field(default=None, description="승인자")
    approved_at: str | None = Field(default=None, description="승인 시각")
    rejected_by: str | None = Field(default=None, description="반려자")
    rejected_at: str | None = Field(default=None, description="반려 시각")
    rejection_reason: str | None = Field(default=None, description="반려 사유")
    posted: bool = Field(default=False, description="원장 전기 완료 여부")

    @classmethod
    def from_entry(cls, entry: JournalEntry) -> "JournalEntryResponse":
        return cls(**entry.to_dict())


class JournalEntryListResponse(BaseModel):
    """분개 목록 응답"""

    entries: list[JournalEntryResponse] = Field(..., description="분개 목록")
    total: int = Field(..., description="전체 개수")


class LedgerRowResponse(BaseModel):
    """계정 원장 행 (라인별 누적 잔액)"""

    id: str = Field(..., description="원장 라인 ID")
    date: str | None = Field(default=None, description="분개 일자")
    description: str = Field(..., description="적요")
    journal_id: str = Field(..., description="분개 ID")
    debit: str = Field(..., description="차변")
    credit: str = Field(..., description="대변")
    balance: str = Field(..., description="누적 잔액")
    posted_by: str = Field(..., description="전기자")

    @classmethod
    def from_row(cls, row: RunningBalanceRow) -> "LedgerRowResponse":
        line = row.line
        return cls(
            id=line.id,
            date=line.date.isoformat() if line.date else None,
            description=line.description,
            journal_id=line.journal_id,
            debit=str(line.debit),
            credit=str(line.credit),
            balance=str(row.balance),
            posted_by=line.posted_by,
        )


class AccountLedgerResponse(BaseModel):
    """계정 원장 응답"""

    account: AccountResponse = Field(..., description="계정")
    rows: list[LedgerRowResponse] = Field(..., description="원장 행")
    ending_balance: str = Field(..., description="마지막 누적 잔액")


class NotificationResponse(BaseModel):
    """알림 응답"""

    recipient: str = Field(..., description="수신자 (이메일 또는 역할)")
    message: str = Field(..., description="메시지")
    type: str = Field(..., description="알림 유형")
    entry_id: str = Field(..., description="분개 ID")
    created_at: str = Field(..., description="생성 시각")

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationResponse":
        return cls(**notification.to_dict())


class ReportResponse(BaseModel):
    """재무제표 응답 (serialize_report 결과)"""

    company: str = Field(..., description="회사명")
    report: str = Field(..., description="보고서 종류")
    from_date: str | None = Field(default=None, description="시작일")
    to_date: str | None = Field(default=None, description="종료일")
    data: dict[str, Any] = Field(..., description="보고서 본문")
