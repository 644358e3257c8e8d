"""
설정 로더

ledger.yaml 로드 및 장부 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, Paths
from core.ledger.money import Money
from core.types import BookMode


@dataclass(frozen=True)
class SlackConfig:
    """Slack 알림 설정

    webhook_url이 비어 있으면 알림은 DB에만 저장됨
    """

    webhook_url: str = ""
    channel: str | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)


@dataclass(frozen=True)
class LedgerConfig:
    """장부 설정 (ledger.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    mode: BookMode
    company: str
    slack: SlackConfig
    retained_earnings_opening: Money


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def load_config(path: Path | None = None) -> LedgerConfig:
    """ledger.yaml 파일 로드

    Args:
        path: ledger.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        LedgerConfig 인스턴스

    Raises:
        ConfigLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode인 경우
    """
    if path is None:
        path = Paths.CONFIG_FILE

    if not path.exists():
        raise ConfigLoadError(f"ledger.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"ledger.yaml 파싱 실패: {e}") from e

    if data is None:
        raise ConfigLoadError("ledger.yaml이 비어 있습니다")

    # mode 검증
    mode_str = data.get("mode")
    if mode_str is None:
        raise ConfigLoadError("ledger.yaml에 'mode' 필드가 없습니다")

    try:
        mode = BookMode(str(mode_str).lower())
    except ValueError as e:
        valid_modes = [m.value for m in BookMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    slack_data = data.get("slack") or {}
    slack = SlackConfig(
        webhook_url=slack_data.get("webhook_url") or "",
        channel=slack_data.get("channel"),
    )

    reports_data = data.get("reports") or {}
    opening_raw = reports_data.get("retained_earnings_opening", "0.00")

    return LedgerConfig(
        mode=mode,
        company=data.get("company") or Defaults.COMPANY,
        slack=slack,
        retained_earnings_opening=Money.parse(opening_raw),
    )


def get_db_path(config: LedgerConfig) -> Path:
    """모드에 따른 DB 경로 반환

    Args:
        config: LedgerConfig 인스턴스

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if config.mode == BookMode.PRODUCTION:
        return Paths.PROD_DB
    else:
        return Paths.SANDBOX_DB


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    ledger.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: LedgerConfig | None = None
    _db_path_override: Path | None = None

    def __new__(cls, config_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Path | None = None) -> None:
        if self._config is None:
            type(self)._config = load_config(config_path)

    @property
    def mode(self) -> BookMode:
        """현재 장부 모드"""
        assert self._config is not None
        return self._config.mode

    @property
    def company(self) -> str:
        """회사명 (보고서 헤더)"""
        assert self._config is not None
        return self._config.company

    @property
    def slack(self) -> SlackConfig:
        """Slack 알림 설정"""
        assert self._config is not None
        return self._config.slack

    @property
    def retained_earnings_opening(self) -> Money:
        """이익잉여금 기초 잔액"""
        assert self._config is not None
        return self._config.retained_earnings_opening

    @property
    def db_path(self) -> Path:
        """현재 모드의 DB 경로"""
        assert self._config is not None
        if self._db_path_override is not None:
            return self._db_path_override
        return get_db_path(self._config)

    @classmethod
    def override_db_path(cls, path: Path | None) -> None:
        """DB 경로 강제 지정 (테스트용)"""
        cls._db_path_override = path

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None
        cls._db_path_override = None


def get_settings(config_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        config_path: ledger.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(config_path)
