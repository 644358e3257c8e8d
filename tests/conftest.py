"""
pytest 공통 fixture 정의

설정 파일, 샘플 계정과목, 분개 팩토리
"""

import tempfile
from collections.abc import Callable
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from core.config.loader import Settings
from core.ledger.accounts import Account
from core.ledger.journal import JournalEntry, JournalLine
from core.ledger.money import Money
from core.ledger.poster import LedgerLine


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_settings():
    """테스트 간 Settings 싱글턴 격리"""
    Settings.reset()
    yield
    Settings.reset()


# -------------------------------------------------------------------------
# 설정 파일
# -------------------------------------------------------------------------

@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """테스트용 ledger.yaml 파일 생성 (sandbox)"""
    content = """# 테스트용 ledger.yaml
mode: sandbox
company: "Test Books"

slack:
  webhook_url: ""

reports:
  retained_earnings_opening: "1,000.00"
"""
    path = temp_dir / "ledger.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_config_file_production(temp_dir: Path) -> Path:
    """테스트용 ledger.yaml 파일 생성 (production, Slack 설정)"""
    content = """mode: production
company: "Prod Books"

slack:
  webhook_url: "https://hooks.slack.com/services/T000/B000/XXXX"
  channel: "#accounting"
"""
    path = temp_dir / "ledger_prod.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_config_file_invalid_mode(temp_dir: Path) -> Path:
    """잘못된 모드의 ledger.yaml 파일 생성"""
    path = temp_dir / "ledger_invalid.yaml"
    path.write_text("mode: live\ncompany: Nope\n", encoding="utf-8")
    return path


# -------------------------------------------------------------------------
# 계정과목
# -------------------------------------------------------------------------

@pytest.fixture
def accounts() -> list[Account]:
    """샘플 계정과목

    acc-120(Supplies)은 비활성 계정.
    """
    return [
        Account(id="acc-101", name="Cash", number="101", category="Asset",
                initial_balance=Money.parse("1000.00")),
        Account(id="acc-110", name="Accounts Receivable", number="110", category="Asset"),
        Account(id="acc-120", name="Supplies", number="120", category="Asset", active=False),
        Account(id="acc-201", name="Accounts Payable", number="201", category="Liability"),
        Account(id="acc-301", name="Owner's Capital", number="301", category="Equity",
                initial_balance=Money.parse("1000.00")),
        Account(id="acc-401", name="Service Revenue", number="401", category="Revenue"),
        Account(id="acc-501", name="Rent Expense", number="501", category="Expense"),
    ]


# -------------------------------------------------------------------------
# 분개 / 원장 라인 팩토리
# -------------------------------------------------------------------------

@pytest.fixture
def make_entry() -> Callable[..., JournalEntry]:
    """분개 생성 팩토리

    debits/credits: [(account_id, amount)] 목록
    """

    def _make(
        entry_id: str = "je-001",
        debits: list[tuple[str, str]] | None = None,
        credits: list[tuple[str, str]] | None = None,
        description: str = "Test entry",
        status: str = "pending",
        entry_date: date | None = date(2026, 3, 1),
        prepared_by: str | None = "kim@example.com",
    ) -> JournalEntry:
        debits = debits if debits is not None else [("acc-101", "100.00")]
        credits = credits if credits is not None else [("acc-401", "100.00")]
        lines = [
            *(JournalLine(account_id=a, amount=Money.parse(x), side="debit") for a, x in debits),
            *(JournalLine(account_id=a, amount=Money.parse(x), side="credit") for a, x in credits),
        ]
        return JournalEntry(
            id=entry_id,
            date=entry_date,
            description=description,
            lines=lines,
            status=status,
            prepared_by=prepared_by,
            created_at=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def make_line() -> Callable[..., LedgerLine]:
    """원장 라인 생성 팩토리"""

    def _make(
        account_id: str,
        debit: str = "0",
        credit: str = "0",
        line_date: date | None = date(2026, 3, 1),
        journal_id: str = "je-001",
        line_index: int = 0,
        description: str = "Test entry",
        posted_at: datetime | None = None,
    ) -> LedgerLine:
        return LedgerLine(
            id=f"{journal_id}:{line_index}",
            account_id=account_id,
            debit=Money.parse(debit),
            credit=Money.parse(credit),
            description=description,
            journal_id=journal_id,
            line_index=line_index,
            date=line_date,
            posted_by="lee@example.com",
            posted_at=posted_at,
        )

    return _make
