"""
분개 모델

분개(JournalEntry)와 분개 라인(JournalLine) 정의.
구버전 문서 형태(debits/credits 배열, lines 단일 배열)를
JournalLine(side) 하나의 내부 표현으로 정규화.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any

from core.domain.state_machines import JournalStateMachine, StateMachineError
from core.ledger.errors import JournalStateError, ValidationError
from core.ledger.money import Money, sum_money
from core.ledger.types import LEGACY_STATUS_ALIASES, JournalSide, JournalStatus

logger = logging.getLogger(__name__)


@dataclass
class JournalLine:
    """분개 라인 (전기 전)

    account_name은 작성 시점의 계정명 스냅샷.
    """

    account_id: str | None
    amount: Money
    side: str  # JournalSide 값
    account_name: str = ""

    @property
    def is_debit(self) -> bool:
        return self.side == JournalSide.DEBIT.value

    @property
    def is_credit(self) -> bool:
        return self.side == JournalSide.CREDIT.value

    def to_dict(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "account_name": self.account_name,
            "amount": str(self.amount),
            "side": self.side,
        }


@dataclass
class JournalEntry:
    """분개

    차변 합계 = 대변 합계 (제출 시 검증, 전기 전 재검증).
    approved 이후에는 메타데이터(승인자, 시각, posted)만 변경 가능.
    rejected는 종료 상태이며 전기 대상에서 제외.
    """

    id: str
    date: date | None
    description: str
    lines: list[JournalLine] = field(default_factory=list)
    status: str = JournalStatus.PENDING.value
    prepared_by: str | None = None
    created_at: datetime | None = None

    approved_by: str | None = None
    approved_at: datetime | None = None
    rejected_by: str | None = None
    rejected_at: datetime | None = None
    rejection_reason: str | None = None

    # approved이면서 원장 라인 저장이 모두 끝난 경우에만 True
    posted: bool = False

    @property
    def debit_lines(self) -> list[JournalLine]:
        return [line for line in self.lines if line.is_debit]

    @property
    def credit_lines(self) -> list[JournalLine]:
        return [line for line in self.lines if line.is_credit]

    @property
    def total_debits(self) -> Money:
        return sum_money(line.amount for line in self.debit_lines)

    @property
    def total_credits(self) -> Money:
        return sum_money(line.amount for line in self.credit_lines)

    def is_balanced(self) -> bool:
        """차변 합계 = 대변 합계 (센트 단위 정확히 일치)"""
        return self.total_debits == self.total_credits

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (감사 로그 스냅샷, 저장용)"""
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "description": self.description,
            "lines": [line.to_dict() for line in self.lines],
            "total_debits": str(self.total_debits),
            "total_credits": str(self.total_credits),
            "status": self.status,
            "prepared_by": self.prepared_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "approved_by": self.approved_by,
            "approved_at": self.approved_at.isoformat() if self.approved_at else None,
            "rejected_by": self.rejected_by,
            "rejected_at": self.rejected_at.isoformat() if self.rejected_at else None,
            "rejection_reason": self.rejection_reason,
            "posted": self.posted,
        }


# =========================================================================
# 정규화 (구버전 문서 → 내부 표현)
# =========================================================================


def normalize_status(status: str | None) -> str:
    """상태값 정규화

    알 수 없는 값이나 누락은 pending으로 처리.
    """
    if not status:
        return JournalStatus.PENDING.value
    value = str(status).lower()
    if value in {s.value for s in JournalStatus}:
        return value
    return LEGACY_STATUS_ALIASES.get(value, JournalStatus.PENDING.value)


def _line_from_mapping(raw: Mapping[str, Any], side: str) -> JournalLine:
    account_id = raw.get("account_id", raw.get("accountId")) or None
    return JournalLine(
        account_id=str(account_id) if account_id is not None else None,
        amount=Money.parse(raw.get("amount")),
        side=side,
        account_name=raw.get("account_name", raw.get("accountName")) or "",
    )


def normalize_lines(document: Mapping[str, Any]) -> list[JournalLine]:
    """분개 문서의 라인을 JournalLine 목록으로 정규화

    지원 형태:
    - {"lines": [{..., "side": "debit"|"credit"}]} (단일 배열)
    - {"debits": [...], "credits": [...]} (구버전 분리 배열)

    lines가 있으면 우선 사용. 순서는 원본 순서 유지
    (분리 배열은 debits → credits 순).

    Raises:
        ValidationError: lines 항목의 side가 debit/credit가 아닌 경우
    """
    raw_lines = document.get("lines")
    if raw_lines:
        lines = []
        for raw in raw_lines:
            side = str(raw.get("side") or "").lower()
            if side not in (JournalSide.DEBIT.value, JournalSide.CREDIT.value):
                raise ValidationError(f"Journal line has an invalid side: {raw.get('side')!r}")
            lines.append(_line_from_mapping(raw, side))
        return lines

    debits = document.get("debits") or []
    credits = document.get("credits") or []
    return [
        *(_line_from_mapping(raw, JournalSide.DEBIT.value) for raw in debits),
        *(_line_from_mapping(raw, JournalSide.CREDIT.value) for raw in credits),
    ]


def _parse_date(value: Any, strict: bool = False) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        if strict:
            raise ValidationError(f"Invalid journal entry date: {value!r}.") from e
        logger.warning(f"분개 날짜 파싱 실패: {value!r}")
        return None


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def entry_from_document(document: Mapping[str, Any], strict: bool = False) -> JournalEntry:
    """분개 문서(dict)에서 JournalEntry 생성

    date가 없으면 created_at의 날짜를 사용.
    snake_case와 구버전 camelCase 키 모두 허용.

    Args:
        document: 분개 문서
        strict: True면 해석할 수 없는 date를 None 대신 ValidationError로 거부 (제출 시)

    Raises:
        ValidationError: 라인 side 오류, strict일 때 date 오류
    """
    created_at = _parse_datetime(document.get("created_at", document.get("createdAt")))
    entry_date = _parse_date(document.get("date"), strict=strict)
    if entry_date is None and created_at is not None:
        entry_date = created_at.date()

    return JournalEntry(
        id=str(document["id"]),
        date=entry_date,
        description=document.get("description") or "",
        lines=normalize_lines(document),
        status=normalize_status(document.get("status")),
        prepared_by=document.get("prepared_by", document.get("createdBy")),
        created_at=created_at,
        approved_by=document.get("approved_by", document.get("approvedBy")),
        approved_at=_parse_datetime(document.get("approved_at", document.get("approvedAt"))),
        rejected_by=document.get("rejected_by", document.get("rejectedBy")),
        rejected_at=_parse_datetime(document.get("rejected_at", document.get("rejectedAt"))),
        rejection_reason=document.get("rejection_reason", document.get("rejectionReason")),
        posted=bool(document.get("posted", False)),
    )


# =========================================================================
# 상태 전이
# =========================================================================


def _transition(entry: JournalEntry, target: JournalStatus) -> None:
    machine = JournalStateMachine(entry.status)
    try:
        machine.transition(target)
    except StateMachineError as e:
        raise JournalStateError(
            f"Journal entry {entry.id} is {entry.status} and cannot be {target.value}"
        ) from e


def approve(entry: JournalEntry, acting_user: str, at: datetime) -> JournalEntry:
    """승인 처리된 새 JournalEntry 반환 (원본 불변)

    Raises:
        JournalStateError: pending이 아닌 분개
    """
    _transition(entry, JournalStatus.APPROVED)
    return replace(
        entry,
        status=JournalStatus.APPROVED.value,
        approved_by=acting_user,
        approved_at=at,
    )


def reject(
    entry: JournalEntry,
    acting_user: str,
    at: datetime,
    reason: str | None = None,
) -> JournalEntry:
    """반려 처리된 새 JournalEntry 반환 (원본 불변)

    Raises:
        JournalStateError: pending이 아닌 분개
    """
    _transition(entry, JournalStatus.REJECTED)
    return replace(
        entry,
        status=JournalStatus.REJECTED.value,
        rejected_by=acting_user,
        rejected_at=at,
        rejection_reason=reason,
    )


# =========================================================================
# 목록 필터
# =========================================================================


def _matches_search(entry: JournalEntry, term: str) -> bool:
    if term in entry.description.lower():
        return True
    for line in entry.lines:
        if term in line.account_name.lower():
            return True
        if term in str(line.amount):
            return True
    return False


def filter_entries(
    entries: Iterable[JournalEntry],
    status: str | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
    search: str | None = None,
) -> list[JournalEntry]:
    """분개 목록 필터

    Args:
        entries: 분개 목록
        status: pending/approved/rejected (None 또는 "all"이면 전체)
        from_date: 시작일 (포함)
        to_date: 종료일 (포함)
        search: 설명, 계정명, 금액 부분 일치 (대소문자 무시)

    Returns:
        조건에 맞는 분개 목록 (원래 순서 유지)
    """
    term = (search or "").strip().lower()
    result = []
    for entry in entries:
        if status and status != "all" and entry.status != status:
            continue
        if from_date and (entry.date is None or entry.date < from_date):
            continue
        if to_date and (entry.date is None or entry.date > to_date):
            continue
        if term and not _matches_search(entry, term):
            continue
        result.append(entry)
    return result
