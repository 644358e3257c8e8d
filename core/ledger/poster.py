"""
원장 전기기

승인된 분개를 계정별 원장 라인(LedgerLine)으로 변환.
라인 하나당 원장 라인 하나: 차변 라인은 debit=금액/credit=0, 대변 라인은 반대.

전기는 (journal_id, line_index) 멱등성 키로 중복을 방지하며,
실제 저장과 트랜잭션 처리는 LedgerStore가 담당.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from core.domain.state_machines import JournalStateMachine
from core.ledger.errors import PostingError
from core.ledger.journal import JournalEntry, entry_from_document
from core.ledger.money import Money
from core.utils.idempotency import make_posting_key
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerLine:
    """원장 라인 (불변, append-only)

    debit/credit 중 정확히 하나만 0이 아님.
    잔액 계산의 유일한 근거 (기초 잔액은 Account에서).
    """

    id: str
    account_id: str
    debit: Money
    credit: Money
    description: str
    journal_id: str
    line_index: int
    date: date | None
    posted_by: str
    posted_at: datetime | None

    @property
    def idempotency_key(self) -> str:
        return make_posting_key(self.journal_id, self.line_index)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (저장/직렬화용, 금액은 문자열)"""
        return {
            "id": self.id,
            "account_id": self.account_id,
            "debit": str(self.debit),
            "credit": str(self.credit),
            "description": self.description,
            "journal_id": self.journal_id,
            "line_index": self.line_index,
            "date": self.date.isoformat() if self.date else None,
            "posted_by": self.posted_by,
            "posted_at": self.posted_at.isoformat() if self.posted_at else None,
        }


class LedgerPoster:
    """승인된 분개 → 원장 라인 변환

    사용 예시:
    ```python
    poster = LedgerPoster()
    lines = poster.post(entry, acting_user="manager@example.com")
    await store.save_ledger_lines(entry.id, lines)
    ```
    """

    def post(
        self,
        entry: JournalEntry | Mapping[str, Any],
        acting_user: str,
        posted_at: datetime | None = None,
        already_posted: Iterable[str] = (),
    ) -> list[LedgerLine]:
        """원장 라인 생성

        Args:
            entry: 승인된 분개 (JournalEntry 또는 구버전 문서 dict)
            acting_user: 전기 사용자
            posted_at: 전기 시각 (None이면 현재 UTC)
            already_posted: 이미 저장된 멱등성 키 (해당 라인은 생략)

        Returns:
            새로 저장할 원장 라인 목록 (라인 순서 유지)

        Raises:
            PostingError: approved가 아니거나 차대 불일치인 경우
        """
        if not isinstance(entry, JournalEntry):
            entry = entry_from_document(entry)

        if not JournalStateMachine(entry.status).is_postable:
            raise PostingError(
                f"Journal entry {entry.id} is {entry.status}; only approved entries can be posted",
                journal_id=entry.id,
            )

        if not entry.is_balanced():
            raise PostingError(
                f"Journal entry {entry.id} is unbalanced: "
                f"debits {entry.total_debits}, credits {entry.total_credits}",
                journal_id=entry.id,
            )

        posted_at = posted_at or now_utc()
        skip = set(already_posted)
        lines: list[LedgerLine] = []

        for index, line in enumerate(entry.lines):
            key = make_posting_key(entry.id, index)
            if key in skip:
                logger.info(f"이미 전기된 라인 생략: {key}")
                continue

            if not line.account_id:
                raise PostingError(
                    f"Journal entry {entry.id} line {index} has no account",
                    journal_id=entry.id,
                )

            lines.append(LedgerLine(
                id=key,
                account_id=line.account_id,
                debit=line.amount if line.is_debit else Money.zero(),
                credit=line.amount if line.is_credit else Money.zero(),
                description=entry.description,
                journal_id=entry.id,
                line_index=index,
                date=entry.date,
                posted_by=acting_user,
                posted_at=posted_at,
            ))

        return lines
