"""
SQLite 어댑터

장부 DB(aiosqlite) 연결 관리.
- 쓰기 연결: WAL 모드, 외래 키 활성화
- 읽기 연결: URI mode=ro (보고서/목록 조회)

원장 라인 불변 트리거가 RAISE(ABORT)로 막은 변경은
sqlite3.IntegrityError로 그대로 전파됨.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Iterable

import aiosqlite

from core.constants import Paths
from core.ledger.schema import init_ledger_schema
from core.types import BookMode

logger = logging.getLogger(__name__)

# 모든 연결에 적용 (journal_mode는 쓰기 연결만)
_CONNECTION_PRAGMAS = (
    "PRAGMA busy_timeout=30000",
    "PRAGMA foreign_keys=ON",
)

Params = tuple[Any, ...] | None


def get_db_path(mode: BookMode | str) -> Path:
    """장부 모드별 DB 파일 경로

    문자열 모드는 대소문자를 무시한다 ("Production" → production).
    """
    book_mode = BookMode(mode.lower()) if isinstance(mode, str) else mode
    return Paths.PROD_DB if book_mode is BookMode.PRODUCTION else Paths.SANDBOX_DB


async def create_connection(
    db_path: Path | str,
    readonly: bool = False,
) -> aiosqlite.Connection:
    """장부 DB 연결 생성

    Args:
        db_path: DB 파일 경로 (상위 디렉토리는 자동 생성)
        readonly: True면 mode=ro URI로 열어 쓰기 차단

    Returns:
        PRAGMA가 적용된 aiosqlite 연결
    """
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if readonly:
        conn = await aiosqlite.connect(f"file:{path}?mode=ro", uri=True)
    else:
        conn = await aiosqlite.connect(path)
        await conn.execute("PRAGMA journal_mode=WAL")

    for pragma in _CONNECTION_PRAGMAS:
        await conn.execute(pragma)

    logger.debug(f"장부 DB 연결: {path} ({'읽기 전용' if readonly else '읽기/쓰기'})")
    return conn


class SQLiteAdapter:
    """장부 DB 어댑터

    LedgerStore가 사용하는 얇은 실행 계층.
    행은 튜플로 반환하며, 매핑은 store 쪽 _row_to_* 함수가 담당.

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        async with db.transaction():
            await db.execute("INSERT INTO ledger_line ...", params)
    ```
    """

    def __init__(self, db_path: Path | str, readonly: bool = False):
        self.db_path = Path(db_path)
        self.readonly = readonly
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> aiosqlite.Connection:
        """열린 연결 (미연결 시 RuntimeError)"""
        if self._conn is None:
            raise RuntimeError(f"Not connected to database: {self.db_path}")
        return self._conn

    async def connect(self) -> None:
        if self._conn is None:
            self._conn = await create_connection(self.db_path, self.readonly)

    async def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        logger.debug(f"장부 DB 연결 종료: {self.db_path}")

    async def execute(self, sql: str, parameters: Params = None) -> aiosqlite.Cursor:
        return await self.connection.execute(sql, parameters or ())

    async def executemany(
        self,
        sql: str,
        parameters: Iterable[tuple[Any, ...]],
    ) -> aiosqlite.Cursor:
        return await self.connection.executemany(sql, parameters)

    async def fetchone(self, sql: str, parameters: Params = None) -> tuple[Any, ...] | None:
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(self, sql: str, parameters: Params = None) -> list[tuple[Any, ...]]:
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["SQLiteAdapter"]:
        """블록 단위 트랜잭션

        블록이 정상 종료되면 커밋, 예외가 나면 롤백 후 예외를 다시 던진다.
        분개 하나의 원장 라인 전체가 이 단위로 저장된다.
        """
        conn = self.connection
        try:
            yield self
        except BaseException:
            await conn.rollback()
            raise
        await conn.commit()

    async def table_exists(self, table_name: str) -> bool:
        row = await self.fetchone(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table_name,),
        )
        return row is not None

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter, seed_accounts: bool = False) -> None:
    """장부 스키마 생성 (반복 실행 안전)

    Args:
        adapter: 연결된 SQLiteAdapter
        seed_accounts: True면 기본 계정과목(INITIAL_ACCOUNTS) 등록
    """
    await init_ledger_schema(adapter, seed_accounts=seed_accounts)
