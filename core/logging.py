"""
로깅 설정 유틸리티

Web 서버와 CLI 스크립트가 공유하는 로깅 설정.
- 콘솔: stdout
- 파일: logs/<process>/<process>.log (자정마다 회전, 7일 보관)

사용법:
    from core.logging import setup_logging
    setup_logging("cli")
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# 요청/쿼리마다 로그를 남기는 서드파티 로거 (WARNING 이상만)
NOISY_LOGGERS = (
    "aiosqlite",
    "httpcore",
    "httpx",
    "asyncio",
    "multipart",
)

_PROCESS_LOG_DIRS = {
    "web": Paths.WEB_LOGS_DIR,
    "cli": Paths.CLI_LOGS_DIR,
}


def get_log_file_path(process_name: str, base_dir: Path | None = None) -> Path:
    """프로세스 로그 파일 경로

    Args:
        process_name: "web" 또는 "cli" (그 외는 logs/ 바로 아래)
        base_dir: 로그 루트 디렉토리 (테스트에서 tmp_path 지정)
    """
    if base_dir is not None:
        log_dir = base_dir / process_name
    else:
        log_dir = _PROCESS_LOG_DIRS.get(process_name, Paths.LOGS_DIR)
    return log_dir / f"{process_name}.log"


def _daily_file_handler(log_file: Path, level: int) -> TimedRotatingFileHandler:
    handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"  # cli.log.2026-03-01
    handler.setLevel(level)
    return handler


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.INFO,
    base_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거 초기화

    반복 호출해도 핸들러가 중복되지 않도록 기존 핸들러를 교체한다.

    Args:
        process_name: 프로세스 이름 ("web" 또는 "cli")
        console_level: 콘솔 로그 레벨
        file_level: 파일 로그 레벨
        base_dir: 로그 루트 디렉토리 (None이면 Paths 기준)

    Returns:
        설정된 루트 Logger
    """
    log_file = get_log_file_path(process_name, base_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)

    handlers: list[logging.Handler] = [console_handler, _daily_file_handler(log_file, file_level)]
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers[:] = handlers

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"로깅 초기화 완료: {process_name} → {log_file}")
    return root_logger
