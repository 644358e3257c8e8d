"""
타입 정의 모듈

Enum 등 공통 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class BookMode(str, Enum):
    """장부 모드 (실장부 / 연습용 샌드박스)"""

    PRODUCTION = "production"
    SANDBOX = "sandbox"


class EntityKind(str, Enum):
    """감사 로그 Entity 종류"""

    ACCOUNT = "account"
    JOURNAL_ENTRY = "journal_entry"


class AuditAction(str, Enum):
    """감사 로그 행위"""

    CREATE = "create"
    UPDATE = "update"
    DEACTIVATE = "deactivate"
    APPROVE = "approve"
    REJECT = "reject"


class UserRole(str, Enum):
    """사용자 역할

    역할별 권한 검사는 이 저장소 범위 밖 (알림 수신자 지정에만 사용).
    """

    ADMIN = "admin"
    MANAGER = "manager"
    ACCOUNTANT = "accountant"
