"""
외부 협력자 이벤트 모델

엔진이 외부 컬렉션(에러 로그, 감사 로그, 알림함)으로 넘기는 데이터 구조.
저장 방식은 각 협력자 구현체가 결정.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4


@dataclass(frozen=True)
class ErrorEvent:
    """에러 로그 이벤트

    검증 실패 등 사용자에게 표시된 오류 메시지를 기록.
    """

    user: str
    message: str
    context: str  # ErrorContexts 값 (예: JE_VALIDATION)
    timestamp: datetime
    event_id: str = field(default_factory=lambda: str(uuid4()))

    @staticmethod
    def create(user: str, message: str, context: str) -> "ErrorEvent":
        """현재 시각으로 에러 이벤트 생성"""
        return ErrorEvent(
            user=user,
            message=message,
            context=context,
            timestamp=datetime.now(timezone.utc),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "event_id": self.event_id,
            "user": self.user,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class AuditEvent:
    """감사 로그 이벤트 (변경 전/후 스냅샷)"""

    entity: str  # EntityKind 값
    entity_id: str
    action: str  # AuditAction 값
    user: str
    before: dict[str, Any] | None
    after: dict[str, Any] | None
    at: datetime
    event_id: str = field(default_factory=lambda: str(uuid4()))

    @staticmethod
    def create(
        entity: str,
        entity_id: str,
        action: str,
        user: str,
        before: dict[str, Any] | None,
        after: dict[str, Any] | None,
    ) -> "AuditEvent":
        """현재 시각으로 감사 이벤트 생성"""
        return AuditEvent(
            entity=entity,
            entity_id=entity_id,
            action=action,
            user=user,
            before=before,
            after=after,
            at=datetime.now(timezone.utc),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "event_id": self.event_id,
            "entity": self.entity,
            "entity_id": self.entity_id,
            "action": self.action,
            "user": self.user,
            "before": self.before,
            "after": self.after,
            "at": self.at.isoformat(),
        }


@dataclass(frozen=True)
class Notification:
    """알림 페이로드

    recipient: 사용자 이메일 또는 역할 (예: "manager")
    type: NotificationType 값
    """

    recipient: str
    message: str
    type: str
    entry_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "recipient": self.recipient,
            "message": self.message,
            "type": self.type,
            "entry_id": self.entry_id,
            "created_at": self.created_at.isoformat(),
        }
