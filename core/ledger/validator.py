"""
분개 검증기

제출 전 분개의 내부 일관성을 검사.
위반 규칙은 아래 고정 순서로 첫 번째 하나만 반환 (에러 메시지 결정성).

1. 설명 필수
2. 모든 라인에 계정 선택
3. 차변 금액 > 0 (음수 / 0 구분 메시지)
4. 차변 계정 존재
5. 차변 계정 활성
6. 대변 라인에 3~5 반복
7. 차변/대변 각 1개 이상
8. 차변 합계 = 대변 합계 (센트 단위)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.constants import ErrorContexts
from core.domain.events import ErrorEvent
from core.ledger.accounts import Account, accounts_by_id
from core.ledger.errors import AccountReferenceError, ValidationError
from core.ledger.journal import JournalEntry, JournalLine
from core.ledger.money import format_money

if TYPE_CHECKING:
    from adapters.interfaces import IErrorLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """검증 결과"""

    ok: bool
    error: ValidationError | None = None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""


def _line_label(line: JournalLine, accounts: dict[str, Account]) -> str:
    account = accounts.get(line.account_id or "")
    if account is not None:
        return account.label
    return line.account_name or str(line.account_id)


def _check_side(
    lines: list[JournalLine],
    side_label: str,
    accounts: dict[str, Account],
) -> ValidationError | None:
    """한쪽 방향 라인에 대한 규칙 3~5"""
    for line in lines:
        if line.amount.is_negative:
            return ValidationError(
                f"{side_label} amount for {_line_label(line, accounts)} cannot be negative."
            )
        if line.amount.is_zero:
            return ValidationError(
                f"{side_label} amount for {_line_label(line, accounts)} must be greater than zero."
            )

    for line in lines:
        if line.account_id not in accounts:
            return AccountReferenceError(
                f"{side_label} account {_line_label(line, accounts)} does not exist.",
                account_id=line.account_id,
            )

    for line in lines:
        account = accounts[line.account_id]  # type: ignore[index]
        if not account.active:
            return AccountReferenceError(
                f"{side_label} line uses inactive account {account.label}.",
                account_id=account.id,
            )

    return None


def find_violation(
    entry: JournalEntry,
    accounts: Iterable[Account],
) -> ValidationError | None:
    """첫 번째 위반 규칙 반환 (순수 함수)

    Args:
        entry: 검증할 분개 초안
        accounts: 현재 계정 목록

    Returns:
        위반 시 ValidationError (또는 AccountReferenceError), 통과 시 None
    """
    lookup = accounts_by_id(accounts)

    if not entry.description.strip():
        return ValidationError("Description is required.")

    if any(not line.account_id for line in entry.lines):
        return ValidationError("All lines must have an account selected.")

    for lines, label in ((entry.debit_lines, "Debit"), (entry.credit_lines, "Credit")):
        error = _check_side(lines, label, lookup)
        if error is not None:
            return error

    if not entry.debit_lines or not entry.credit_lines:
        return ValidationError(
            "Each journal entry must have at least one debit and one credit."
        )

    if not entry.is_balanced():
        return ValidationError(
            f"Total debits ({format_money(entry.total_debits)}) must equal "
            f"total credits ({format_money(entry.total_credits)})."
        )

    return None


class JournalValidator:
    """분개 검증기

    검증 자체는 순수 함수이며, 실패 시 에러 로그 협력자에게만 이벤트를 넘김.

    Args:
        error_log: 에러 로그 협력자 (None이면 로깅만)

    사용 예시:
    ```python
    validator = JournalValidator(error_log=store)
    result = await validator.validate(entry, accounts, acting_user="kim@example.com")
    if not result.ok:
        show(result.message)
    ```
    """

    def __init__(self, error_log: IErrorLog | None = None):
        self.error_log = error_log

    async def validate(
        self,
        entry: JournalEntry,
        accounts: Iterable[Account],
        acting_user: str,
        context: str = ErrorContexts.JE_VALIDATION,
    ) -> ValidationResult:
        """분개 검증

        Args:
            entry: 검증할 분개 초안
            accounts: 현재 계정 목록
            acting_user: 작업 사용자
            context: 에러 로그 context 태그

        Returns:
            ValidationResult
        """
        error = find_violation(entry, accounts)
        if error is None:
            return ValidationResult(ok=True)

        logger.warning(
            f"분개 검증 실패: {error}",
            extra={"entry_id": entry.id, "user": acting_user},
        )

        if self.error_log is not None:
            await self.error_log.record_error(
                ErrorEvent.create(user=acting_user, message=str(error), context=context)
            )

        return ValidationResult(ok=False, error=error)

    async def check(
        self,
        entry: JournalEntry,
        accounts: Iterable[Account],
        acting_user: str,
        context: str = ErrorContexts.JE_VALIDATION,
    ) -> None:
        """분개 검증 (실패 시 예외)

        Raises:
            ValidationError: 위반 규칙 (AccountReferenceError 포함)
        """
        result = await self.validate(entry, accounts, acting_user, context)
        if result.error is not None:
            raise result.error
