"""
미전기 분개 재전기

승인되었지만 원장 전기가 끝나지 않은 분개(posted=0)를 찾아 다시 전기.
이미 저장된 라인은 멱등성 키로 건너뛰므로 여러 번 실행해도 안전.
재전기 후에도 남은 분개가 있으면 Slack으로 ERROR 알림 (ledger.yaml에 webhook 설정 시).

사용법:
    python -m scripts.retry_postings --mode production --user ops@example.com
    python -m scripts.retry_postings --mode sandbox --dry-run
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter, get_db_path, init_schema
from adapters.interfaces import INotifier
from adapters.slack.notifier import SlackNotifier, build_notifier
from core.config.loader import ConfigLoadError, load_config
from core.ledger.errors import PostingError
from core.ledger.service import LedgerService
from core.ledger.store import LedgerStore
from core.logging import setup_logging
from core.types import BookMode

logger = logging.getLogger(__name__)


async def alert_failures(notifier: INotifier, mode: str, failed: list[str]) -> bool:
    """재전기 후 남은 미전기 분개 알림"""
    return await notifier.send(
        f"재전기 실패 분개 {len(failed)}건 (posted=0 유지)",
        level="ERROR",
        extra={"mode": mode, "entries": ", ".join(failed)},
    )


async def main(
    mode: str,
    acting_user: str,
    dry_run: bool = False,
    notifier: INotifier | None = None,
) -> list[str]:
    """재전기 실행

    Returns:
        재전기에 실패한 분개 ID 목록
    """
    db_path = get_db_path(BookMode(mode.lower()))

    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        store = LedgerStore(db)
        service = LedgerService(store)

        pending = await store.get_unposted_approved_entries()
        logger.info(f"미전기 분개 {len(pending)}건")

        failed: list[str] = []
        for entry in pending:
            if dry_run:
                logger.info(f"[dry-run] {entry.id} {entry.date} {entry.description}")
                continue
            try:
                result = await service.retry_posting(entry.id, acting_user)
                logger.info(
                    f"재전기 완료: {entry.id} (신규 {len(result.inserted)}, 중복 {len(result.skipped)})"
                )
            except PostingError as e:
                failed.append(entry.id)
                logger.error(f"재전기 실패: {entry.id}: {e}")

    if failed and notifier is not None:
        await alert_failures(notifier, mode, failed)
    return failed


def load_notifier() -> SlackNotifier | None:
    """ledger.yaml의 Slack 설정으로 Notifier 생성 (설정 파일이 없으면 None)"""
    try:
        config = load_config()
    except ConfigLoadError as e:
        logger.warning(f"Slack 알림 비활성 (설정 로드 실패): {e}")
        return None
    return build_notifier(config.slack, username=config.company)


async def run(mode: str, acting_user: str, dry_run: bool) -> list[str]:
    notifier = load_notifier()
    try:
        return await main(mode, acting_user, dry_run, notifier=notifier)
    finally:
        if notifier is not None:
            await notifier.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="미전기 분개 재전기")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in BookMode],
        default=BookMode.SANDBOX.value,
        help="장부 모드 (기본: sandbox)",
    )
    parser.add_argument(
        "--user",
        default="cli:retry",
        help="전기 사용자 (posted_by)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="대상만 출력하고 전기하지 않음",
    )
    args = parser.parse_args()

    setup_logging("cli")
    sys.exit(1 if asyncio.run(run(args.mode, args.user, args.dry_run)) else 0)
