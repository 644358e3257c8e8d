"""
미전기 분개 재전기 스크립트 테스트
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.mock.notifier import MockNotifier
from core.ledger.store import LedgerStore
from scripts import retry_postings


class TestRetryPostings:
    """retry_postings.main 테스트"""

    @pytest.fixture
    def db_path(self, db: SQLiteAdapter) -> Path:
        return db.db_path

    @pytest.mark.asyncio
    async def test_completes_unposted_entry(
        self, store: LedgerStore, db_path: Path, make_entry,
    ) -> None:
        await store.save_entry(make_entry(status="approved"))
        notifier = MockNotifier()

        with patch.object(retry_postings, "get_db_path", return_value=db_path):
            failed = await retry_postings.main("sandbox", "cli:retry", notifier=notifier)

        assert failed == []
        assert (await store.get_entry("je-001")).posted is True
        assert notifier.message_count == 0

    @pytest.mark.asyncio
    async def test_alerts_remaining_failures(
        self, store: LedgerStore, db_path: Path, make_entry,
    ) -> None:
        """존재하지 않는 계정 라인은 계속 실패 → ERROR 알림"""
        await store.save_entry(make_entry(status="approved", credits=[("acc-999", "100.00")]))
        notifier = MockNotifier()

        with patch.object(retry_postings, "get_db_path", return_value=db_path):
            failed = await retry_postings.main("sandbox", "cli:retry", notifier=notifier)

        assert failed == ["je-001"]
        assert (await store.get_entry("je-001")).posted is False
        assert notifier.message_count == 1
        assert notifier.last_notification.level == "ERROR"
        assert notifier.last_notification.extra == {"mode": "sandbox", "entries": "je-001"}

    @pytest.mark.asyncio
    async def test_dry_run_leaves_entries(
        self, store: LedgerStore, db_path: Path, make_entry,
    ) -> None:
        await store.save_entry(make_entry(status="approved"))

        with patch.object(retry_postings, "get_db_path", return_value=db_path):
            failed = await retry_postings.main("sandbox", "cli:retry", dry_run=True)

        assert failed == []
        assert (await store.get_entry("je-001")).posted is False


class TestLoadNotifier:
    """load_notifier 테스트"""

    def test_missing_config_disables_alerts(self) -> None:
        with patch.object(retry_postings, "load_config", side_effect=retry_postings.ConfigLoadError("없음")):
            assert retry_postings.load_notifier() is None
