"""
복식부기 스키마 초기화

Web/CLI 시작 시 자동으로 Ledger 테이블 생성.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작.

ledger_line은 append-only: UPDATE/DELETE는 트리거로 차단.
"""

import logging
from typing import TYPE_CHECKING

from core.ledger.types import INITIAL_ACCOUNTS

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


async def init_ledger_schema(db: "SQLiteAdapter", seed_accounts: bool = False) -> None:
    """Ledger 스키마 초기화

    이미 존재하는 경우 안전하게 건너뜀 (IF NOT EXISTS).

    Args:
        db: SQLiteAdapter 인스턴스
        seed_accounts: True면 기본 계정과목 등록 (INSERT OR IGNORE)
    """
    await _create_ledger_tables(db)
    await _create_immutability_triggers(db)
    if seed_accounts:
        await _insert_initial_accounts(db)
    await db.commit()
    logger.info("Ledger 스키마 초기화 완료")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """Ledger 테이블 생성"""

    # account 테이블 (물리 삭제 없음, is_active로 비활성화)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS account (
            account_id       TEXT PRIMARY KEY,
            name             TEXT NOT NULL UNIQUE,
            number           TEXT NOT NULL UNIQUE,
            category         TEXT NOT NULL,
            subcategory      TEXT NOT NULL DEFAULT '',
            normal_side      TEXT,
            initial_balance  TEXT NOT NULL DEFAULT '0.00',
            is_active        INTEGER NOT NULL DEFAULT 1,
            description      TEXT NOT NULL DEFAULT '',
            statement        TEXT NOT NULL DEFAULT 'BS',
            display_order    TEXT NOT NULL DEFAULT '01',
            comment          TEXT NOT NULL DEFAULT '',
            created_by       TEXT,
            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # journal_entry 테이블
    await db.execute("""
        CREATE TABLE IF NOT EXISTS journal_entry (
            entry_id         TEXT PRIMARY KEY,
            entry_date       TEXT,
            description      TEXT NOT NULL,
            status           TEXT NOT NULL DEFAULT 'pending',
            prepared_by      TEXT,
            created_at       TEXT NOT NULL,
            approved_by      TEXT,
            approved_at      TEXT,
            rejected_by      TEXT,
            rejected_at      TEXT,
            rejection_reason TEXT,
            posted           INTEGER NOT NULL DEFAULT 0
        )
    """)

    # journal_line 테이블 (전기 전 분개 라인)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS journal_line (
            line_id          INTEGER PRIMARY KEY AUTOINCREMENT,
            entry_id         TEXT NOT NULL,
            line_order       INTEGER NOT NULL,
            account_id       TEXT,
            account_name     TEXT NOT NULL DEFAULT '',
            side             TEXT NOT NULL CHECK (side IN ('debit', 'credit')),
            amount           TEXT NOT NULL,
            UNIQUE(entry_id, line_order),
            FOREIGN KEY (entry_id) REFERENCES journal_entry(entry_id)
        )
    """)

    # ledger_line 테이블 (append-only, 잔액의 유일한 근거)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS ledger_line (
            seq              INTEGER PRIMARY KEY AUTOINCREMENT,
            line_id          TEXT NOT NULL,
            idempotency_key  TEXT NOT NULL UNIQUE,
            account_id       TEXT NOT NULL,
            journal_id       TEXT NOT NULL,
            line_index       INTEGER NOT NULL,
            debit            TEXT NOT NULL DEFAULT '0.00',
            credit           TEXT NOT NULL DEFAULT '0.00',
            description      TEXT NOT NULL DEFAULT '',
            entry_date       TEXT,
            posted_by        TEXT NOT NULL,
            posted_at        TEXT,
            FOREIGN KEY (journal_id) REFERENCES journal_entry(entry_id),
            FOREIGN KEY (account_id) REFERENCES account(account_id)
        )
    """)
    await db.execute("""
        CREATE INDEX IF NOT EXISTS idx_ledger_line_account
        ON ledger_line(account_id, entry_date)
    """)

    # error_log 테이블 (검증 실패 메시지)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS error_log (
            event_id         TEXT PRIMARY KEY,
            user             TEXT NOT NULL,
            message          TEXT NOT NULL,
            context          TEXT NOT NULL,
            ts               TEXT NOT NULL
        )
    """)

    # audit_log 테이블 (변경 전/후 스냅샷)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS audit_log (
            event_id         TEXT PRIMARY KEY,
            entity           TEXT NOT NULL,
            entity_id        TEXT NOT NULL,
            action           TEXT NOT NULL,
            user             TEXT NOT NULL,
            before_json      TEXT,
            after_json       TEXT,
            ts               TEXT NOT NULL
        )
    """)

    # notification 테이블 (알림함)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS notification (
            notification_id  INTEGER PRIMARY KEY AUTOINCREMENT,
            recipient        TEXT NOT NULL,
            message          TEXT NOT NULL,
            type             TEXT NOT NULL,
            entry_id         TEXT NOT NULL,
            is_read          INTEGER NOT NULL DEFAULT 0,
            created_at       TEXT NOT NULL
        )
    """)


async def _create_immutability_triggers(db: "SQLiteAdapter") -> None:
    """ledger_line 수정/삭제 차단 트리거"""
    await db.execute("""
        CREATE TRIGGER IF NOT EXISTS prevent_ledger_line_update
        BEFORE UPDATE ON ledger_line
        BEGIN
            SELECT RAISE(ABORT, 'Ledger lines cannot be modified');
        END
    """)
    await db.execute("""
        CREATE TRIGGER IF NOT EXISTS prevent_ledger_line_delete
        BEFORE DELETE ON ledger_line
        BEGIN
            SELECT RAISE(ABORT, 'Ledger lines cannot be deleted');
        END
    """)


async def _insert_initial_accounts(db: "SQLiteAdapter") -> None:
    """기본 계정과목 등록"""
    for number, name, category, subcategory, statement in INITIAL_ACCOUNTS:
        await db.execute(
            """
            INSERT OR IGNORE INTO account (
                account_id, name, number, category, subcategory, statement, created_by
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (f"acc-{number}", name, number, category, subcategory, statement, "system"),
        )
