"""
로깅 설정 테스트
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from core.constants import Paths
from core.logging import get_log_file_path, setup_logging


@pytest.fixture
def restore_root_handlers():
    """테스트 후 루트 로거 핸들러 원복"""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestGetLogFilePath:
    """get_log_file_path 테스트"""

    def test_default_dirs(self) -> None:
        assert get_log_file_path("web") == Paths.WEB_LOGS_DIR / "web.log"
        assert get_log_file_path("cli") == Paths.CLI_LOGS_DIR / "cli.log"

    def test_base_dir(self, tmp_path: Path) -> None:
        assert get_log_file_path("cli", tmp_path) == tmp_path / "cli" / "cli.log"


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_file_handler(self, tmp_path: Path, restore_root_handlers) -> None:
        root = setup_logging("cli", base_dir=tmp_path)

        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(file_handlers) == 1
        assert Path(file_handlers[0].baseFilename) == get_log_file_path("cli", tmp_path)

        logging.getLogger("ledgerbook.test").info("전기 완료")
        file_handlers[0].flush()
        assert "전기 완료" in get_log_file_path("cli", tmp_path).read_text(encoding="utf-8")

    def test_no_duplicate_handlers(self, tmp_path: Path, restore_root_handlers) -> None:
        setup_logging("cli", base_dir=tmp_path)
        root = setup_logging("cli", base_dir=tmp_path)

        assert len(root.handlers) == 2

    def test_noisy_loggers_quieted(self, tmp_path: Path, restore_root_handlers) -> None:
        setup_logging("web", base_dir=tmp_path)

        assert logging.getLogger("aiosqlite").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
