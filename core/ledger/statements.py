"""
재무제표 생성

compute_balances() 결과({account_id: BalanceSnapshot})로 4대 보고서 생성.
- 시산표 (Trial Balance)
- 손익계산서 (Income Statement)
- 재무상태표 (Balance Sheet)
- 이익잉여금처분계산서 (Retained Earnings Statement)

모두 부작용 없는 순수 함수. 같은 입력으로 몇 번을 다시 만들어도 결과가 같음.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from datetime import date, datetime
from typing import Any

from core.ledger.accounts import Account, is_debit_normal
from core.ledger.balances import BalanceSnapshot
from core.ledger.money import Money
from core.ledger.types import AccountCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrialBalanceRow:
    """시산표 행"""

    account: Account
    debit: Money
    credit: Money


@dataclass(frozen=True)
class TrialBalance:
    """시산표

    차변 합계와 대변 합계는 같아야 하지만 이 함수가 강제하지 않음.
    불일치는 상위 전기/검증 결함의 신호이므로 is_balanced로 노출.
    """

    rows: list[TrialBalanceRow]
    total_debit: Money
    total_credit: Money

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit

    @property
    def difference(self) -> Money:
        return self.total_debit - self.total_credit


@dataclass(frozen=True)
class IncomeStatement:
    """손익계산서"""

    revenue: Money
    expenses: Money
    net_income: Money


@dataclass(frozen=True)
class BalanceSheet:
    """재무상태표"""

    assets: Money
    liabilities: Money
    equity: Money
    retained_earnings: Money
    equity_total: Money

    @property
    def liabilities_and_equity(self) -> Money:
        return self.liabilities + self.equity_total


@dataclass(frozen=True)
class RetainedEarningsStatement:
    """이익잉여금 계산서"""

    opening: Money
    net_income: Money
    dividends: Money
    ending: Money


def trial_balance(snapshots: Mapping[str, BalanceSnapshot]) -> TrialBalance:
    """시산표 생성

    정상 방향 잔액은 해당 열에, 반대 방향 잔액(contra)은 절대값으로 반대 열에 표시.
    """
    rows: list[TrialBalanceRow] = []
    total_debit = Money.zero()
    total_credit = Money.zero()

    for snapshot in snapshots.values():
        end = snapshot.end
        positive = end if end.is_positive else Money.zero()
        negative = -end if end.is_negative else Money.zero()

        if is_debit_normal(snapshot.account):
            debit, credit = positive, negative
        else:
            debit, credit = negative, positive

        rows.append(TrialBalanceRow(account=snapshot.account, debit=debit, credit=credit))
        total_debit = total_debit + debit
        total_credit = total_credit + credit

    report = TrialBalance(rows=rows, total_debit=total_debit, total_credit=total_credit)
    if not report.is_balanced:
        logger.warning(
            f"시산표 불일치: 차변 {total_debit}, 대변 {total_credit} "
            f"(차이 {report.difference})"
        )
    return report


def _sum_category(snapshots: Mapping[str, BalanceSnapshot], category: AccountCategory) -> Money:
    total = Money.zero()
    for snapshot in snapshots.values():
        if snapshot.account.category == category.value:
            total = total + snapshot.end
    return total


def income_statement(snapshots: Mapping[str, BalanceSnapshot]) -> IncomeStatement:
    """손익계산서 생성 (수익 - 비용)"""
    revenue = _sum_category(snapshots, AccountCategory.REVENUE)
    expenses = _sum_category(snapshots, AccountCategory.EXPENSE)
    return IncomeStatement(
        revenue=revenue,
        expenses=expenses,
        net_income=revenue - expenses,
    )


def balance_sheet(
    snapshots: Mapping[str, BalanceSnapshot],
    retained_earnings_opening: Money | None = None,
    period_net_income: Money | None = None,
) -> BalanceSheet:
    """재무상태표 생성

    순이익은 직접 계산하지 않고 호출자가 손익계산서 결과를 넘김
    (두 보고서를 독립적으로도, 함께도 생성 가능).

    Args:
        snapshots: 계정별 잔액
        retained_earnings_opening: 이익잉여금 기초 잔액
        period_net_income: 기간 순이익
    """
    retained_earnings = (retained_earnings_opening or Money.zero()) + (
        period_net_income or Money.zero()
    )
    equity = _sum_category(snapshots, AccountCategory.EQUITY)
    return BalanceSheet(
        assets=_sum_category(snapshots, AccountCategory.ASSET),
        liabilities=_sum_category(snapshots, AccountCategory.LIABILITY),
        equity=equity,
        retained_earnings=retained_earnings,
        equity_total=equity + retained_earnings,
    )


def retained_earnings_statement(
    opening: Money,
    net_income: Money,
    dividends: Money | None = None,
) -> RetainedEarningsStatement:
    """이익잉여금 계산서 생성

    배당은 아직 시스템에서 관리하지 않으므로 기본 0.
    """
    dividends = dividends or Money.zero()
    return RetainedEarningsStatement(
        opening=opening,
        net_income=net_income,
        dividends=dividends,
        ending=opening + net_income - dividends,
    )


# =========================================================================
# 직렬화
# =========================================================================


def _serialize(value: Any) -> Any:
    if isinstance(value, Money):
        return str(value)
    if isinstance(value, Account):
        return {"id": value.id, "number": value.number, "name": value.name}
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        data = {f.name: _serialize(getattr(value, f.name)) for f in fields(value)}
        if isinstance(value, TrialBalance):
            data["is_balanced"] = value.is_balanced
        return data
    if isinstance(value, Mapping):
        return {str(k): _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


def serialize_report(report: Any) -> dict[str, Any]:
    """보고서를 JSON 호환 dict로 변환

    Money → 소수점 2자리 문자열, 날짜 → ISO 문자열, 계정 → {id, number, name}.
    저장/메일 발송 협력자에게 그대로 넘길 수 있는 형태.
    """
    return _serialize(report)
