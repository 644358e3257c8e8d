"""
Ledger 저장소

계정과목, 분개, 원장 라인, 에러/감사 로그, 알림함 저장 및 조회.
IErrorLog, IAuditLog Protocol 구현.

원장 라인은 idempotency_key(journal_id:line_index) UNIQUE 제약으로
중복 전기를 차단하고, 한 분개의 라인 전체를 하나의 트랜잭션으로 저장.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from core.domain.events import AuditEvent, ErrorEvent, Notification
from core.ledger.accounts import Account
from core.ledger.errors import PostingError
from core.ledger.journal import JournalEntry, JournalLine
from core.ledger.money import Money
from core.ledger.poster import LedgerLine
from core.utils.timezone import now_utc

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


@dataclass
class PostingResult:
    """전기 결과

    inserted: 이번에 새로 저장된 멱등성 키
    skipped: 이미 존재하여 건너뛴 멱등성 키
    """

    journal_id: str
    inserted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def line_count(self) -> int:
        return len(self.inserted) + len(self.skipped)


_ACCOUNT_COLUMNS = """
    account_id, name, number, category, subcategory, normal_side,
    initial_balance, is_active, description, statement, display_order,
    comment, created_by
"""

_ENTRY_COLUMNS = """
    entry_id, entry_date, description, status, prepared_by, created_at,
    approved_by, approved_at, rejected_by, rejected_at, rejection_reason, posted
"""

_LEDGER_COLUMNS = """
    line_id, account_id, debit, credit, description, journal_id,
    line_index, entry_date, posted_by, posted_at
"""


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _to_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _to_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _row_to_account(row: tuple[Any, ...]) -> Account:
    return Account(
        id=row[0],
        name=row[1],
        number=row[2],
        category=row[3],
        subcategory=row[4],
        normal_side=row[5],
        initial_balance=Money.parse(row[6]),
        active=bool(row[7]),
        description=row[8],
        statement=row[9],
        order=row[10],
        comment=row[11],
        created_by=row[12],
    )


def _row_to_ledger_line(row: tuple[Any, ...]) -> LedgerLine:
    return LedgerLine(
        id=row[0],
        account_id=row[1],
        debit=Money.parse(row[2]),
        credit=Money.parse(row[3]),
        description=row[4],
        journal_id=row[5],
        line_index=row[6],
        date=_to_date(row[7]),
        posted_by=row[8],
        posted_at=_to_datetime(row[9]),
    )


class LedgerStore:
    """Ledger 저장소

    Args:
        db: SQLite 어댑터

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        store = LedgerStore(db)
        accounts = await store.get_accounts()
        lines = await store.get_ledger_lines()
    ```
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # -------------------------------------------------------------------------
    # 계정과목
    # -------------------------------------------------------------------------

    async def create_account(self, account: Account) -> str:
        """계정 등록

        Returns:
            저장된 account_id
        """
        await self.db.execute(
            f"""
            INSERT INTO account ({_ACCOUNT_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                account.id,
                account.name,
                account.number,
                account.category,
                account.subcategory,
                account.normal_side,
                str(account.initial_balance),
                1 if account.active else 0,
                account.description,
                account.statement,
                account.order,
                account.comment,
                account.created_by,
            ),
        )
        await self.db.commit()
        logger.debug(f"Saved account: {account.id}")
        return account.id

    async def update_account(self, account: Account) -> None:
        """계정 수정 (전체 필드 덮어쓰기)"""
        await self.db.execute(
            """
            UPDATE account SET
                name = ?, number = ?, category = ?, subcategory = ?,
                normal_side = ?, initial_balance = ?, is_active = ?,
                description = ?, statement = ?, display_order = ?, comment = ?
            WHERE account_id = ?
            """,
            (
                account.name,
                account.number,
                account.category,
                account.subcategory,
                account.normal_side,
                str(account.initial_balance),
                1 if account.active else 0,
                account.description,
                account.statement,
                account.order,
                account.comment,
                account.id,
            ),
        )
        await self.db.commit()

    async def get_account(self, account_id: str) -> Account | None:
        """계정 단건 조회"""
        row = await self.db.fetchone(
            f"SELECT {_ACCOUNT_COLUMNS} FROM account WHERE account_id = ?",
            (account_id,),
        )
        return _row_to_account(row) if row else None

    async def get_accounts(self, active_only: bool = False) -> list[Account]:
        """계정 목록 조회 (표시 순서, 계정번호 순)

        Args:
            active_only: True면 활성 계정만
        """
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM account"
        if active_only:
            sql += " WHERE is_active = 1"
        sql += " ORDER BY display_order, number"
        rows = await self.db.fetchall(sql)
        return [_row_to_account(row) for row in rows]

    # -------------------------------------------------------------------------
    # 분개
    # -------------------------------------------------------------------------

    async def save_entry(self, entry: JournalEntry) -> str:
        """분개 저장 (journal_entry + journal_line, 트랜잭션)

        Returns:
            저장된 entry_id
        """
        async with self.db.transaction():
            await self.db.execute(
                f"""
                INSERT INTO journal_entry ({_ENTRY_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    _iso(entry.date),
                    entry.description,
                    entry.status,
                    entry.prepared_by,
                    _iso(entry.created_at) or now_utc().isoformat(),
                    entry.approved_by,
                    _iso(entry.approved_at),
                    entry.rejected_by,
                    _iso(entry.rejected_at),
                    entry.rejection_reason,
                    1 if entry.posted else 0,
                ),
            )

            for i, line in enumerate(entry.lines):
                await self.db.execute(
                    """
                    INSERT INTO journal_line (
                        entry_id, line_order, account_id, account_name, side, amount
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        entry.id,
                        i,
                        line.account_id,
                        line.account_name,
                        line.side,
                        str(line.amount),
                    ),
                )

        logger.debug(f"Saved journal entry: {entry.id}")
        return entry.id

    async def update_entry_status(self, entry: JournalEntry) -> None:
        """분개 상태/메타데이터 갱신 (라인은 변경하지 않음)"""
        await self.db.execute(
            """
            UPDATE journal_entry SET
                status = ?, approved_by = ?, approved_at = ?,
                rejected_by = ?, rejected_at = ?, rejection_reason = ?
            WHERE entry_id = ?
            """,
            (
                entry.status,
                entry.approved_by,
                _iso(entry.approved_at),
                entry.rejected_by,
                _iso(entry.rejected_at),
                entry.rejection_reason,
                entry.id,
            ),
        )
        await self.db.commit()

    async def _load_lines(self, entry_id: str) -> list[JournalLine]:
        rows = await self.db.fetchall(
            """
            SELECT account_id, account_name, side, amount
            FROM journal_line
            WHERE entry_id = ?
            ORDER BY line_order
            """,
            (entry_id,),
        )
        return [
            JournalLine(
                account_id=row[0],
                account_name=row[1],
                side=row[2],
                amount=Money.parse(row[3]),
            )
            for row in rows
        ]

    async def _row_to_entry(self, row: tuple[Any, ...]) -> JournalEntry:
        return JournalEntry(
            id=row[0],
            date=_to_date(row[1]),
            description=row[2],
            lines=await self._load_lines(row[0]),
            status=row[3],
            prepared_by=row[4],
            created_at=_to_datetime(row[5]),
            approved_by=row[6],
            approved_at=_to_datetime(row[7]),
            rejected_by=row[8],
            rejected_at=_to_datetime(row[9]),
            rejection_reason=row[10],
            posted=bool(row[11]),
        )

    async def get_entry(self, entry_id: str) -> JournalEntry | None:
        """분개 단건 조회 (라인 포함)"""
        row = await self.db.fetchone(
            f"SELECT {_ENTRY_COLUMNS} FROM journal_entry WHERE entry_id = ?",
            (entry_id,),
        )
        if row is None:
            return None
        return await self._row_to_entry(row)

    async def get_entries(self, status: str | None = None) -> list[JournalEntry]:
        """분개 목록 조회 (최신 생성순)

        Args:
            status: 상태 필터 (None이면 전체)
        """
        sql = f"SELECT {_ENTRY_COLUMNS} FROM journal_entry"
        params: tuple[Any, ...] = ()
        if status:
            sql += " WHERE status = ?"
            params = (status,)
        sql += " ORDER BY created_at DESC"

        rows = await self.db.fetchall(sql, params)
        return [await self._row_to_entry(row) for row in rows]

    async def get_unposted_approved_entries(self) -> list[JournalEntry]:
        """승인되었지만 전기가 끝나지 않은 분개 (재시도 대상)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_ENTRY_COLUMNS} FROM journal_entry
            WHERE status = 'approved' AND posted = 0
            ORDER BY approved_at
            """
        )
        return [await self._row_to_entry(row) for row in rows]

    # -------------------------------------------------------------------------
    # 원장
    # -------------------------------------------------------------------------

    async def save_ledger_lines(
        self,
        journal_id: str,
        lines: list[LedgerLine],
    ) -> PostingResult:
        """원장 라인 저장 + 분개 posted 표시 (단일 트랜잭션)

        이미 저장된 idempotency_key는 INSERT OR IGNORE로 건너뜀.
        실패 시 전체 롤백되어 일부만 전기된 분개가 남지 않음.

        Raises:
            PostingError: 저장 실패 (분개는 posted=0으로 유지)
        """
        result = PostingResult(journal_id=journal_id)
        current_key: str | None = None

        try:
            async with self.db.transaction():
                for line in lines:
                    current_key = line.idempotency_key
                    cursor = await self.db.execute(
                        f"""
                        INSERT OR IGNORE INTO ledger_line (
                            idempotency_key, {_LEDGER_COLUMNS}
                        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            line.idempotency_key,
                            line.id,
                            line.account_id,
                            str(line.debit),
                            str(line.credit),
                            line.description,
                            line.journal_id,
                            line.line_index,
                            _iso(line.date),
                            line.posted_by,
                            _iso(line.posted_at),
                        ),
                    )
                    if cursor.rowcount == 0:
                        result.skipped.append(line.idempotency_key)
                    else:
                        result.inserted.append(line.idempotency_key)

                await self.db.execute(
                    "UPDATE journal_entry SET posted = 1 WHERE entry_id = ?",
                    (journal_id,),
                )
        except Exception as e:
            logger.error(
                f"원장 전기 실패: {journal_id} (line {current_key}): {e}",
            )
            # 트랜잭션 롤백으로 이번 시도의 INSERT는 모두 취소, 기존 라인만 남음
            already_posted = set(result.skipped)
            raise PostingError(
                f"Failed to post journal entry {journal_id}: {e}",
                journal_id=journal_id,
                pending_keys=[
                    line.idempotency_key for line in lines
                    if line.idempotency_key not in already_posted
                ],
                posted_keys=result.skipped,
            ) from e

        if result.skipped:
            logger.info(f"중복 원장 라인 {len(result.skipped)}건 건너뜀: {journal_id}")
        logger.debug(f"Posted journal entry: {journal_id} ({len(result.inserted)} lines)")
        return result

    async def get_posted_keys(self, journal_id: str) -> set[str]:
        """분개의 이미 저장된 멱등성 키"""
        rows = await self.db.fetchall(
            "SELECT idempotency_key FROM ledger_line WHERE journal_id = ?",
            (journal_id,),
        )
        return {row[0] for row in rows}

    async def get_ledger_lines(self, account_id: str | None = None) -> list[LedgerLine]:
        """원장 라인 조회 (저장 순서)

        Args:
            account_id: 계정 필터 (None이면 전체)
        """
        sql = f"SELECT {_LEDGER_COLUMNS} FROM ledger_line"
        params: tuple[Any, ...] = ()
        if account_id:
            sql += " WHERE account_id = ?"
            params = (account_id,)
        sql += " ORDER BY seq"

        rows = await self.db.fetchall(sql, params)
        return [_row_to_ledger_line(row) for row in rows]

    # -------------------------------------------------------------------------
    # 에러 로그 (IErrorLog)
    # -------------------------------------------------------------------------

    async def record_error(self, event: ErrorEvent) -> None:
        """에러 이벤트 기록"""
        await self.db.execute(
            """
            INSERT INTO error_log (event_id, user, message, context, ts)
            VALUES (?, ?, ?, ?, ?)
            """,
            (event.event_id, event.user, event.message, event.context, event.timestamp.isoformat()),
        )
        await self.db.commit()

    async def get_errors(self, context: str | None = None) -> list[ErrorEvent]:
        """에러 이벤트 조회 (기록 순)"""
        sql = "SELECT event_id, user, message, context, ts FROM error_log"
        params: tuple[Any, ...] = ()
        if context:
            sql += " WHERE context = ?"
            params = (context,)
        sql += " ORDER BY ts, rowid"

        rows = await self.db.fetchall(sql, params)
        return [
            ErrorEvent(
                event_id=row[0],
                user=row[1],
                message=row[2],
                context=row[3],
                timestamp=datetime.fromisoformat(row[4]),
            )
            for row in rows
        ]

    # -------------------------------------------------------------------------
    # 감사 로그 (IAuditLog)
    # -------------------------------------------------------------------------

    async def record_audit(self, event: AuditEvent) -> None:
        """감사 이벤트 기록 (변경 전/후 JSON)"""
        await self.db.execute(
            """
            INSERT INTO audit_log (
                event_id, entity, entity_id, action, user, before_json, after_json, ts
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                event.event_id,
                event.entity,
                event.entity_id,
                event.action,
                event.user,
                json.dumps(event.before, ensure_ascii=False) if event.before is not None else None,
                json.dumps(event.after, ensure_ascii=False) if event.after is not None else None,
                event.at.isoformat(),
            ),
        )
        await self.db.commit()

    async def get_audit_events(
        self,
        entity: str | None = None,
        entity_id: str | None = None,
    ) -> list[AuditEvent]:
        """감사 이벤트 조회 (기록 순)"""
        conditions = []
        params: list[Any] = []
        if entity:
            conditions.append("entity = ?")
            params.append(entity)
        if entity_id:
            conditions.append("entity_id = ?")
            params.append(entity_id)

        sql = """
            SELECT event_id, entity, entity_id, action, user, before_json, after_json, ts
            FROM audit_log
        """
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += " ORDER BY ts, rowid"

        rows = await self.db.fetchall(sql, tuple(params))
        return [
            AuditEvent(
                event_id=row[0],
                entity=row[1],
                entity_id=row[2],
                action=row[3],
                user=row[4],
                before=json.loads(row[5]) if row[5] else None,
                after=json.loads(row[6]) if row[6] else None,
                at=datetime.fromisoformat(row[7]),
            )
            for row in rows
        ]

    # -------------------------------------------------------------------------
    # 알림함
    # -------------------------------------------------------------------------

    async def save_notification(self, notification: Notification) -> None:
        """알림 저장"""
        await self.db.execute(
            """
            INSERT INTO notification (recipient, message, type, entry_id, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                notification.recipient,
                notification.message,
                notification.type,
                notification.entry_id,
                notification.created_at.isoformat(),
            ),
        )
        await self.db.commit()

    async def get_notifications(self, recipient: str | None = None) -> list[Notification]:
        """알림 조회 (기록 순)"""
        sql = "SELECT recipient, message, type, entry_id, created_at FROM notification"
        params: tuple[Any, ...] = ()
        if recipient:
            sql += " WHERE recipient = ?"
            params = (recipient,)
        sql += " ORDER BY notification_id"

        rows = await self.db.fetchall(sql, params)
        return [
            Notification(
                recipient=row[0],
                message=row[1],
                type=row[2],
                entry_id=row[3],
                created_at=datetime.fromisoformat(row[4]),
            )
            for row in rows
        ]
