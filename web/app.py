"""
FastAPI 애플리케이션

라우터 등록, 도메인 예외 → HTTP 응답 매핑, 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config.loader import get_settings
from core.ledger.errors import (
    AccountError,
    DateRangeError,
    JournalStateError,
    LedgerError,
    NotFoundError,
    PostingError,
    ValidationError,
)
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.dependencies import build_notifier, get_notifier, set_notifier
from web.routes import accounts, health, journal, ledger, reports

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema

    settings = get_settings()

    # 시작 시 - DB 스키마 자동 초기화 + 기본 계정과목
    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db, seed_accounts=True)

    # 테스트 등에서 미리 주입한 Notifier가 있으면 유지
    owned_notifier = None
    if get_notifier() is None:
        owned_notifier = build_notifier(settings)
        if owned_notifier is not None:
            set_notifier(owned_notifier)
            logger.info("Web: Slack 알림 활성화")

    yield

    # 종료 시 - 리소스 정리
    if owned_notifier is not None:
        await owned_notifier.close()
        set_notifier(None)


app = FastAPI(
    title="Ledgerbook API",
    description="복식부기 장부 API (분개 검증, 원장 전기, 재무제표)",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================================================
# 도메인 예외 → HTTP 응답
# =========================================================================

# 하위 클래스가 먼저 오도록 정렬 (AccountReferenceError는 ValidationError로 처리)
ERROR_STATUS: list[tuple[type[LedgerError], int]] = [
    (NotFoundError, 404),
    (JournalStateError, 409),
    (PostingError, 500),
    (ValidationError, 400),
    (AccountError, 400),
    (DateRangeError, 400),
]


def status_for(error: LedgerError) -> int:
    """예외 종류별 HTTP 상태 코드"""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return 400


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """LedgerError 계열 예외 응답"""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} 실패: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(journal.router)
app.include_router(ledger.router)
app.include_router(reports.router)
