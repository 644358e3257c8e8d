"""
원장 전기기 테스트

승인 분개 → 원장 라인 변환, 멱등성 키, 구버전 문서 입력
"""

from datetime import date, datetime, timezone

import pytest

from core.ledger.errors import PostingError
from core.ledger.money import Money
from core.ledger.poster import LedgerPoster

POSTED_AT = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def poster() -> LedgerPoster:
    return LedgerPoster()


class TestLedgerPoster:
    """LedgerPoster.post 테스트"""

    def test_one_line_per_journal_line(self, poster, make_entry) -> None:
        entry = make_entry(
            status="approved",
            debits=[("acc-501", "60.00"), ("acc-110", "40.00")],
            credits=[("acc-101", "100.00")],
        )

        lines = poster.post(entry, "lee@example.com", posted_at=POSTED_AT)

        assert len(lines) == 3
        assert [l.account_id for l in lines] == ["acc-501", "acc-110", "acc-101"]
        assert lines[0].debit == Money.parse("60") and lines[0].credit.is_zero
        assert lines[2].credit == Money.parse("100") and lines[2].debit.is_zero

    def test_line_metadata(self, poster, make_entry) -> None:
        entry = make_entry(entry_id="je-42", status="approved", description="Consulting")
        line = poster.post(entry, "lee@example.com", posted_at=POSTED_AT)[0]

        assert line.id == "je-42:0"
        assert line.idempotency_key == "je-42:0"
        assert line.journal_id == "je-42"
        assert line.line_index == 0
        assert line.description == "Consulting"
        assert line.date == date(2026, 3, 1)
        assert line.posted_by == "lee@example.com"
        assert line.posted_at == POSTED_AT

    def test_exactly_one_side_nonzero(self, poster, make_entry) -> None:
        for line in poster.post(make_entry(status="approved"), "lee"):
            assert line.debit.is_zero != line.credit.is_zero

    def test_posted_lines_balance(self, poster, make_entry) -> None:
        lines = poster.post(make_entry(status="approved"), "lee")
        assert sum(l.debit for l in lines) == sum(l.credit for l in lines)

    def test_default_posted_at_is_utc_now(self, poster, make_entry) -> None:
        line = poster.post(make_entry(status="approved"), "lee")[0]
        assert line.posted_at is not None
        assert line.posted_at.tzinfo is not None

    @pytest.mark.parametrize("status", ["pending", "rejected"])
    def test_only_approved_entries(self, poster, make_entry, status: str) -> None:
        with pytest.raises(PostingError, match="only approved entries") as exc_info:
            poster.post(make_entry(status=status), "lee")
        assert exc_info.value.journal_id == "je-001"

    def test_unbalanced_entry_rejected(self, poster, make_entry) -> None:
        entry = make_entry(status="approved", credits=[("acc-401", "99.99")])
        with pytest.raises(PostingError, match="unbalanced"):
            poster.post(entry, "lee")

    def test_already_posted_lines_skipped(self, poster, make_entry) -> None:
        """이미 저장된 키는 생략 (재시도 시 중복 방지)"""
        entry = make_entry(status="approved")
        lines = poster.post(entry, "lee", already_posted={"je-001:0"})

        assert [l.idempotency_key for l in lines] == ["je-001:1"]

    def test_reposting_is_deterministic(self, poster, make_entry) -> None:
        entry = make_entry(status="approved")
        first = poster.post(entry, "lee", posted_at=POSTED_AT)
        second = poster.post(entry, "lee", posted_at=POSTED_AT)
        assert first == second

    def test_accepts_legacy_document(self, poster) -> None:
        """구버전 debits/credits 문서"""
        lines = poster.post(
            {
                "id": "legacy-1",
                "status": "Approved",
                "description": "Legacy",
                "createdAt": "2026-01-05T08:00:00+00:00",
                "debits": [{"accountId": "acc-101", "amount": "1,000"}],
                "credits": [{"accountId": "acc-301", "amount": "1000.00"}],
            },
            "lee",
            posted_at=POSTED_AT,
        )

        assert [l.idempotency_key for l in lines] == ["legacy-1:0", "legacy-1:1"]
        assert lines[0].date == date(2026, 1, 5)
        assert lines[0].debit == Money.parse("1000")
