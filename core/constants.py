"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → ledgerbook/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    COMPANY: str = "Ledgerbook"

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"
    CLI_LOGS_DIR: Path = LOGS_DIR / "cli"

    # 설정 파일
    CONFIG_FILE: Path = CONFIG_DIR / "ledger.yaml"

    # DB 파일
    PROD_DB: Path = DATA_DIR / "ledgerbook_prod.db"
    SANDBOX_DB: Path = DATA_DIR / "ledgerbook_sandbox.db"


class ErrorContexts:
    """에러 로그 context 태그

    에러 로그 컬렉션에서 발생 위치를 구분하는 코드.
    """

    JE_VALIDATION: str = "JE_VALIDATION"  # 분개 검증 실패
    JE_SUBMIT: str = "JE_SUBMIT"  # 분개 제출 중 예외
    JE_POSTING: str = "JE_POSTING"  # 승인 후 원장 전기 실패
    ACCOUNT_FORM: str = "ACCOUNT_FORM"  # 계정과목 입력 검증 실패
