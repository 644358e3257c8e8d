"""
복식부기 타입 정의

계정 분류, 정상 잔액 방향, 분개 상태 등 Ledger 시스템에서 사용하는 Enum 정의
"""

from enum import Enum


class AccountCategory(str, Enum):
    """계정 분류 (5대 계정)

    str을 상속하여 JSON 직렬화 가능.
    """

    ASSET = "Asset"  # 자산
    LIABILITY = "Liability"  # 부채
    EQUITY = "Equity"  # 자본
    REVENUE = "Revenue"  # 수익
    EXPENSE = "Expense"  # 비용


class NormalSide(str, Enum):
    """정상 잔액 방향 (계정과목 설정값)"""

    DEBIT = "Debit"
    CREDIT = "Credit"


class JournalSide(str, Enum):
    """분개 방향 (차변/대변)"""

    DEBIT = "debit"  # 차변 (자산 증가, 비용 증가)
    CREDIT = "credit"  # 대변 (부채/자본/수익 증가)


class JournalStatus(str, Enum):
    """분개 상태

    전이 규칙:
    - pending → approved: 매니저 승인 (원장 전기 대상)
    - pending → rejected: 매니저 반려 (종료 상태)
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    """알림 유형"""

    JOURNAL_SUBMITTED = "journal_submitted"  # 매니저에게 승인 요청
    APPROVAL = "approval"  # 작성자에게 승인 통보
    REJECTION = "rejection"  # 작성자에게 반려 통보


# 계정 분류별 계정번호 첫 자리
CATEGORY_PREFIX: dict[str, str] = {
    AccountCategory.ASSET.value: "1",
    AccountCategory.LIABILITY.value: "2",
    AccountCategory.EQUITY.value: "3",
    AccountCategory.REVENUE.value: "4",
    AccountCategory.EXPENSE.value: "5",
}

# 정상 잔액이 차변인 계정 분류 (normal_side 미지정 시)
DEBIT_NORMAL_CATEGORIES: frozenset[str] = frozenset({
    AccountCategory.ASSET.value,
    AccountCategory.EXPENSE.value,
})

# 구버전 문서의 상태값 별칭
LEGACY_STATUS_ALIASES: dict[str, str] = {
    "pendingapproval": JournalStatus.PENDING.value,
    "submitted": JournalStatus.PENDING.value,
}


# 기본 계정과목 (초기 시드에서 사용)
INITIAL_ACCOUNTS: list[tuple[str, str, str, str, str]] = [
    # (number, name, category, subcategory, statement)

    # 자산
    ("101", "Cash", "Asset", "Current Assets", "BS"),
    ("110", "Accounts Receivable", "Asset", "Current Assets", "BS"),
    ("120", "Supplies", "Asset", "Current Assets", "BS"),
    ("150", "Equipment", "Asset", "Fixed Assets", "BS"),

    # 부채
    ("201", "Accounts Payable", "Liability", "Current Liabilities", "BS"),
    ("210", "Unearned Revenue", "Liability", "Current Liabilities", "BS"),

    # 자본
    ("301", "Owner's Capital", "Equity", "Owner's Equity", "BS"),
    ("310", "Retained Earnings", "Equity", "Owner's Equity", "RE"),

    # 수익
    ("401", "Service Revenue", "Revenue", "Operating Revenue", "IS"),

    # 비용
    ("501", "Rent Expense", "Expense", "Operating Expenses", "IS"),
    ("510", "Salaries Expense", "Expense", "Operating Expenses", "IS"),
    ("520", "Utilities Expense", "Expense", "Operating Expenses", "IS"),
]
