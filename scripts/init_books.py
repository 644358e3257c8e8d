"""
장부 DB 초기화

스키마 생성 + 기본 계정과목 등록 (이미 있으면 건너뜀).

사용법:
    python -m scripts.init_books --mode sandbox
    python -m scripts.init_books --mode production --no-seed
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter, get_db_path, init_schema
from core.logging import setup_logging
from core.types import BookMode

logger = logging.getLogger(__name__)


async def verify_schema(db: SQLiteAdapter) -> bool:
    """스키마 검증 (필수 테이블 존재 여부)"""
    required = ["account", "journal_entry", "journal_line", "ledger_line", "error_log", "audit_log"]
    missing = [t for t in required if not await db.table_exists(t)]
    if missing:
        logger.error(f"누락된 테이블: {missing}")
        return False

    row = await db.fetchone("SELECT COUNT(*) FROM account")
    logger.info(f"등록된 계정 수: {row[0] if row else 0}")
    return True


async def main(mode: str, seed: bool = True) -> None:
    """초기화 실행

    Args:
        mode: production 또는 sandbox
        seed: 기본 계정과목 등록 여부
    """
    db_path = get_db_path(BookMode(mode.lower()))
    logger.info(f"장부 초기화 시작: {db_path}")

    async with SQLiteAdapter(db_path) as db:
        await init_schema(db, seed_accounts=seed)

        if await verify_schema(db):
            logger.info("장부 초기화 완료")
        else:
            raise RuntimeError("스키마 검증 실패")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="장부 DB 초기화")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in BookMode],
        default=BookMode.SANDBOX.value,
        help="장부 모드 (기본: sandbox)",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="기본 계정과목을 등록하지 않음",
    )
    args = parser.parse_args()

    setup_logging("cli")
    asyncio.run(main(args.mode, seed=not args.no_seed))
