"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from typing import AsyncGenerator

from fastapi import Depends, Header

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import INotifier
from adapters.slack.notifier import SlackNotifier
from adapters.slack.notifier import build_notifier as build_slack_notifier
from core.config.loader import Settings, get_settings
from core.ledger.service import LedgerService
from core.ledger.store import LedgerStore


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db() -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (읽기 전용)

    보고서, 목록 조회 등 읽기 작업용.
    """
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path, readonly=True) as db:
        yield db


async def get_db_write() -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (쓰기 가능)

    분개 제출/승인/반려, 계정 등록/수정 시 사용.
    """
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path, readonly=False) as db:
        yield db


def get_acting_user(x_user: str = Header(default="web:admin")) -> str:
    """작업 사용자 (X-User 헤더)

    인증/세션은 이 서비스 범위 밖이므로 호출자가 명시적으로 전달.
    """
    return x_user


# =========================================================================
# Notifier (앱 수명 동안 공유)
# =========================================================================

_notifier: INotifier | None = None


def set_notifier(notifier: INotifier | None) -> None:
    """전역 Notifier 설정 (앱 시작 시, 테스트에서 Mock 주입)"""
    global _notifier
    _notifier = notifier


def get_notifier() -> INotifier | None:
    """전역 Notifier 반환 (설정되지 않았으면 None)"""
    return _notifier


def build_notifier(settings: Settings) -> SlackNotifier | None:
    """설정에서 Slack Notifier 생성 (webhook 미설정 시 None)"""
    return build_slack_notifier(settings.slack, username=settings.company)


# =========================================================================
# LedgerService
# =========================================================================


def _build_service(db: SQLiteAdapter, settings: Settings) -> LedgerService:
    return LedgerService(
        LedgerStore(db),
        notifier=get_notifier(),
        retained_earnings_opening=settings.retained_earnings_opening,
    )


async def get_service(
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> LedgerService:
    """조회용 LedgerService"""
    return _build_service(db, settings)


async def get_write_service(
    db: SQLiteAdapter = Depends(get_db_write),
    settings: Settings = Depends(get_app_settings),
) -> LedgerService:
    """변경용 LedgerService"""
    return _build_service(db, settings)
