"""
잔액 계산 엔진

계정 기초 잔액 + 기간 내 원장 라인으로 계정별 잔액 계산.
- 최종 잔액 모드: compute_balances()
- 라인별 누적 잔액 모드: running_balances()
두 모드는 같은 fold 함수(apply_line)를 사용하므로 부호 규칙이 동일함.

기간 경계는 포함(inclusive). 시작/종료가 없으면 무제한.
begin은 기간과 무관하게 항상 계정의 initial_balance (기초 잔액은 날짜가 있는 사건이 아님).

보고서는 조회 시점의 스냅샷일 뿐이며 다시 계산해도 부작용이 없음.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from core.ledger.accounts import Account, is_debit_normal
from core.ledger.errors import DateRangeError
from core.ledger.money import Money
from core.ledger.poster import LedgerLine

logger = logging.getLogger(__name__)


@dataclass
class BalanceSnapshot:
    """계정 잔액 스냅샷 (저장하지 않는 파생값)"""

    account: Account
    begin: Money
    end: Money
    debit_total: Money = field(default_factory=Money.zero)
    credit_total: Money = field(default_factory=Money.zero)


@dataclass(frozen=True)
class RunningBalanceRow:
    """원장 상세 화면용 라인별 누적 잔액"""

    line: LedgerLine
    balance: Money


@dataclass(frozen=True)
class DateRange:
    """조회 기간 (None은 무제한)"""

    start: date | None = None
    end: date | None = None

    def contains(self, value: date) -> bool:
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True


# =========================================================================
# 기간
# =========================================================================


def parse_bound(value: Any) -> date | None:
    """기간 경계값 파싱 (엄격)

    허용: None, "", date, datetime, ISO 문자열 (YYYY-MM-DD 또는 datetime)

    Raises:
        DateRangeError: 해석할 수 없는 값
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text).date()
        except ValueError as e:
            raise DateRangeError(f"Invalid date: {value!r}") from e
    raise DateRangeError(f"Invalid date: {value!r}")


def normalize_range(from_: Any = None, to: Any = None) -> DateRange:
    """조회 기간 정규화 (관대)

    잘못된 경계값은 오류 대신 무제한으로 처리하고 경고 로그만 남김.
    시작일이 종료일보다 늦으면 양쪽 모두 무제한으로 처리.
    """
    try:
        start = parse_bound(from_)
    except DateRangeError as e:
        logger.warning(f"시작일 무시 (무제한 처리): {e}")
        start = None

    try:
        end = parse_bound(to)
    except DateRangeError as e:
        logger.warning(f"종료일 무시 (무제한 처리): {e}")
        end = None

    if start is not None and end is not None and start > end:
        logger.warning(f"역전된 기간 무시 (무제한 처리): {start} > {end}")
        return DateRange()

    return DateRange(start=start, end=end)


# =========================================================================
# fold
# =========================================================================


def effective_date(line: LedgerLine) -> date | None:
    """라인의 기준 날짜 (date 우선, 없으면 posted_at)"""
    if line.date is not None:
        return line.date
    if line.posted_at is not None:
        return line.posted_at.date()
    return None


def apply_line(balance: Money, debit_normal: bool, debit: Money, credit: Money) -> Money:
    """라인 하나를 잔액에 반영

    차변 정상 계정: balance + debit - credit
    대변 정상 계정: balance + credit - debit
    """
    if debit_normal:
        return balance + debit - credit
    return balance + credit - debit


def _chronological_key(item: tuple[int, LedgerLine]) -> tuple[date, float, int]:
    index, line = item
    when = effective_date(line) or date.min
    posted = line.posted_at.timestamp() if line.posted_at is not None else float("-inf")
    return (when, posted, index)


def chronological(lines: Iterable[LedgerLine]) -> list[LedgerLine]:
    """(기준 날짜, 전기 시각, 입력 순서) 오름차순 정렬"""
    return [line for _, line in sorted(enumerate(lines), key=_chronological_key)]


def _in_range(line: LedgerLine, period: DateRange) -> bool:
    when = effective_date(line)
    if when is None:
        return False
    return period.contains(when)


def compute_balances(
    accounts: Iterable[Account],
    ledger_lines: Iterable[LedgerLine],
    from_: Any = None,
    to: Any = None,
) -> dict[str, BalanceSnapshot]:
    """계정별 잔액 계산

    Args:
        accounts: 계정 목록
        ledger_lines: 원장 라인 목록
        from_: 시작일 (포함, None이면 무제한)
        to: 종료일 (포함, None이면 무제한)

    Returns:
        {account_id: BalanceSnapshot} (계정 입력 순서 유지)
    """
    period = normalize_range(from_, to)

    snapshots: dict[str, BalanceSnapshot] = {}
    debit_normal: dict[str, bool] = {}
    for account in accounts:
        snapshots[account.id] = BalanceSnapshot(
            account=account,
            begin=account.initial_balance,
            end=account.initial_balance,
        )
        debit_normal[account.id] = is_debit_normal(account)

    skipped = 0
    for line in ledger_lines:
        if not _in_range(line, period):
            continue
        snapshot = snapshots.get(line.account_id)
        if snapshot is None:
            skipped += 1
            continue
        snapshot.debit_total = snapshot.debit_total + line.debit
        snapshot.credit_total = snapshot.credit_total + line.credit
        snapshot.end = apply_line(
            snapshot.end, debit_normal[line.account_id], line.debit, line.credit
        )

    if skipped:
        logger.debug(f"계정 목록에 없는 원장 라인 {skipped}건 생략")

    return snapshots


def _matches_search(line: LedgerLine, term: str) -> bool:
    return (
        term in line.description.lower()
        or term in (line.posted_by or "").lower()
        or term in line.journal_id.lower()
        or term in str(line.debit)
        or term in str(line.credit)
    )


def running_balances(
    account: Account,
    ledger_lines: Iterable[LedgerLine],
    from_: Any = None,
    to: Any = None,
    search: str | None = None,
) -> list[RunningBalanceRow]:
    """계정 하나의 라인별 누적 잔액 (원장 상세)

    다른 계정의 라인은 무시. 필터(기간, 검색어) 적용 후 기초 잔액부터 누적.

    Args:
        account: 대상 계정
        ledger_lines: 원장 라인 목록 (순서 무관)
        from_: 시작일 (포함)
        to: 종료일 (포함)
        search: 설명, 전기자, 분개 ID, 금액 부분 일치 (대소문자 무시)

    Returns:
        시간순 RunningBalanceRow 목록
    """
    period = normalize_range(from_, to)
    term = (search or "").strip().lower()
    debit_normal = is_debit_normal(account)

    selected = [
        line for line in ledger_lines
        if line.account_id == account.id and _in_range(line, period)
    ]

    rows: list[RunningBalanceRow] = []
    balance = account.initial_balance
    for line in chronological(selected):
        if term and not _matches_search(line, term):
            continue
        balance = apply_line(balance, debit_normal, line.debit, line.credit)
        rows.append(RunningBalanceRow(line=line, balance=balance))

    return rows


def ending_balance(snapshots: Mapping[str, BalanceSnapshot], account_id: str) -> Money:
    """스냅샷에서 계정 기말 잔액 조회 (없으면 0)"""
    snapshot = snapshots.get(account_id)
    return snapshot.end if snapshot is not None else Money.zero()
