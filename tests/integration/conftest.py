"""
통합 테스트 픽스처

임시 SQLite DB (기본 계정과목 등록) + LedgerStore + LedgerService
"""

from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.mock.notifier import MockNotifier
from core.ledger.money import Money
from core.ledger.service import LedgerService
from core.ledger.store import LedgerStore


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> SQLiteAdapter:
    """스키마가 초기화된 임시 DB"""
    adapter = SQLiteAdapter(tmp_path / "ledger_test.db")
    await adapter.connect()
    await init_schema(adapter, seed_accounts=True)
    yield adapter
    await adapter.close()


@pytest.fixture
def store(db: SQLiteAdapter) -> LedgerStore:
    return LedgerStore(db)


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def service(store: LedgerStore, notifier: MockNotifier) -> LedgerService:
    return LedgerService(store, notifier=notifier, retained_earnings_opening=Money.parse("250.00"))


@pytest.fixture
def draft() -> dict:
    """현금 500 / 서비스 수익 500 분개 초안"""
    return {
        "date": "2026-03-01",
        "description": "Consulting fee",
        "lines": [
            {"account_id": "acc-101", "amount": "500.00", "side": "debit"},
            {"account_id": "acc-401", "amount": "500.00", "side": "credit"},
        ],
    }
