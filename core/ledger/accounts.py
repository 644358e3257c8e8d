"""
계정과목 모델

계정과목(Chart of Accounts) 항목과 관련 규칙.
- 정상 잔액 방향 판정 (is_debit_normal)
- 계정번호 접두사 검증 (number_has_valid_prefix)
- 등록/수정/비활성화 규칙
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from typing import Any

from core.ledger.errors import AccountError
from core.ledger.money import Money
from core.ledger.types import CATEGORY_PREFIX, DEBIT_NORMAL_CATEGORIES, NormalSide

_DIGITS_ONLY = re.compile(r"[0-9]+")


@dataclass
class Account:
    """계정과목

    계정은 물리 삭제되지 않음. 비활성화된 계정은 신규 분개에 사용할 수 없지만
    이미 전기된 원장 라인은 계속 유효함.
    """

    id: str
    name: str
    number: str
    category: str  # AccountCategory 값
    subcategory: str = ""
    normal_side: str | None = None  # 명시하지 않으면 category로 판정
    initial_balance: Money = field(default_factory=Money.zero)
    active: bool = True

    # 표시/관리용 메타
    description: str = ""
    statement: str = "BS"  # BS, IS, RE
    order: str = "01"
    comment: str = ""
    created_by: str | None = None

    @property
    def label(self) -> str:
        """에러 메시지/보고서용 표시명 (예: "101 Cash")"""
        if self.number:
            return f"{self.number} {self.name}"
        return self.name

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (감사 로그 스냅샷, 저장용)"""
        data = asdict(self)
        data["initial_balance"] = str(self.initial_balance)
        return data

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Account:
        """딕셔너리에서 생성

        구버전 문서의 camelCase 키(normalSide, initialBalance)도 허용.
        """
        return Account(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            number=str(data.get("number", "")),
            category=data.get("category", ""),
            subcategory=data.get("subcategory") or "",
            normal_side=data.get("normal_side", data.get("normalSide")) or None,
            initial_balance=Money.parse(
                data.get("initial_balance", data.get("initialBalance"))
            ),
            active=data.get("active", True) is not False,
            description=data.get("description") or "",
            statement=data.get("statement") or "BS",
            order=str(data.get("order") or "01"),
            comment=data.get("comment") or "",
            created_by=data.get("created_by", data.get("createdBy")),
        )


def is_debit_normal(account: Account) -> bool:
    """정상 잔액이 차변인지 판정

    명시된 normal_side가 우선. 없으면 자산/비용 계정만 차변.
    """
    side = (account.normal_side or "").lower()
    if side == NormalSide.DEBIT.value.lower():
        return True
    if side == NormalSide.CREDIT.value.lower():
        return False
    return account.category in DEBIT_NORMAL_CATEGORIES


def is_digits_only(value: str) -> bool:
    """숫자로만 구성되었는지 확인

    계정번호는 식별자이므로 부호, 지수 표기, 공백 모두 거부.
    """
    return bool(_DIGITS_ONLY.fullmatch(str(value)))


def number_has_valid_prefix(category: str, number: str) -> bool:
    """계정번호가 계정 분류의 접두사로 시작하는지 확인

    알 수 없는 분류는 검사하지 않음 (True).
    """
    want = CATEGORY_PREFIX.get(category)
    if not want:
        return True
    return str(number).startswith(want)


def validate_account_form(account: Account) -> None:
    """계정과목 입력값 검증

    Raises:
        AccountError: 이름 누락, 숫자가 아닌 계정번호, 잘못된 접두사
    """
    if not account.name.strip():
        raise AccountError("Account name is required")
    if not is_digits_only(account.number):
        raise AccountError("Account number must be digits only")
    if not number_has_valid_prefix(account.category, account.number):
        raise AccountError(
            f"Account number must start with correct prefix for {account.category}"
        )


def ensure_unique(
    accounts: Iterable[Account],
    name: str,
    number: str,
    exclude_id: str | None = None,
) -> None:
    """계정명/계정번호 중복 검사 (활성 여부 무관)

    Args:
        accounts: 전체 계정 목록
        name: 검사할 계정명
        number: 검사할 계정번호
        exclude_id: 수정 중인 계정 ID (자기 자신 제외)

    Raises:
        AccountError: 중복 발견 시
    """
    others = [a for a in accounts if a.id != exclude_id]
    if any(a.name == name for a in others):
        raise AccountError("Duplicate account name not allowed")
    if any(a.number == str(number) for a in others):
        raise AccountError("Duplicate account number not allowed")


def ensure_can_deactivate(account: Account, balance: Money) -> None:
    """비활성화 가능 여부 확인

    Raises:
        AccountError: 잔액이 0보다 큰 경우
    """
    if balance.is_positive:
        raise AccountError(
            f"Account '{account.label}' has a balance greater than zero and cannot be deactivated"
        )


def accounts_by_id(accounts: Iterable[Account]) -> dict[str, Account]:
    """계정 ID → Account 조회 테이블"""
    return {a.id: a for a in accounts}
