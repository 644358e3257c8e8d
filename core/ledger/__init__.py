"""
복식부기 (Double-Entry Bookkeeping) 엔진

분개 검증 → 원장 전기 → 잔액 계산 → 재무제표 생성.
순수 계산 모듈(money, accounts, journal, validator, poster, balances, statements)과
저장/조정 모듈(store, service)로 구성.

사용 예시:
```python
from core.ledger import LedgerService, LedgerStore

service = LedgerService(LedgerStore(db))

# 분개 제출 및 승인
entry = await service.submit_entry(draft, acting_user="kim@example.com")
await service.approve_entry(entry.id, acting_user="lee@example.com")

# 시산표 조회
report = await service.get_trial_balance(from_="2026-01-01", to="2026-03-31")
assert report.is_balanced
```
"""

from core.ledger.money import Money, format_money, parse_money, sum_money
from core.ledger.types import (
    CATEGORY_PREFIX,
    INITIAL_ACCOUNTS,
    AccountCategory,
    JournalSide,
    JournalStatus,
    NormalSide,
    NotificationType,
)
from core.ledger.errors import (
    AccountError,
    AccountReferenceError,
    DateRangeError,
    JournalStateError,
    LedgerError,
    NotFoundError,
    PostingError,
    ValidationError,
)
from core.ledger.accounts import Account, is_debit_normal
from core.ledger.journal import JournalEntry, JournalLine, entry_from_document
from core.ledger.validator import JournalValidator, ValidationResult, find_violation
from core.ledger.poster import LedgerLine, LedgerPoster
from core.ledger.balances import BalanceSnapshot, compute_balances, running_balances
from core.ledger.statements import (
    balance_sheet,
    income_statement,
    retained_earnings_statement,
    serialize_report,
    trial_balance,
)
from core.ledger.store import LedgerStore, PostingResult
from core.ledger.service import LedgerService

__all__ = [
    # 핵심 클래스
    "LedgerService",
    "LedgerStore",
    "PostingResult",
    "Money",
    "Account",
    "JournalEntry",
    "JournalLine",
    "LedgerLine",
    "LedgerPoster",
    "JournalValidator",
    "ValidationResult",
    "BalanceSnapshot",
    # 함수
    "parse_money",
    "format_money",
    "sum_money",
    "is_debit_normal",
    "entry_from_document",
    "find_violation",
    "compute_balances",
    "running_balances",
    "trial_balance",
    "income_statement",
    "balance_sheet",
    "retained_earnings_statement",
    "serialize_report",
    # Enum
    "AccountCategory",
    "NormalSide",
    "JournalSide",
    "JournalStatus",
    "NotificationType",
    # 상수
    "CATEGORY_PREFIX",
    "INITIAL_ACCOUNTS",
    # 예외
    "LedgerError",
    "ValidationError",
    "AccountReferenceError",
    "PostingError",
    "DateRangeError",
    "AccountError",
    "JournalStateError",
    "NotFoundError",
]
