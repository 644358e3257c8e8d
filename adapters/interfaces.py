"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Any, Protocol, runtime_checkable

from core.domain.events import AuditEvent, ErrorEvent, Notification


@runtime_checkable
class IErrorLog(Protocol):
    """에러 로그 인터페이스

    검증 실패 메시지, 사용자, context 태그를 외부 컬렉션에 기록.
    """

    async def record_error(self, event: ErrorEvent) -> None:
        """에러 이벤트 기록

        Args:
            event: 기록할 에러 이벤트
        """
        ...


@runtime_checkable
class IAuditLog(Protocol):
    """감사 로그 인터페이스

    계정/분개 변경 시 변경 전/후 스냅샷을 기록.
    """

    async def record_audit(self, event: AuditEvent) -> None:
        """감사 이벤트 기록

        Args:
            event: 기록할 감사 이벤트
        """
        ...


@runtime_checkable
class INotifier(Protocol):
    """알림 서비스 인터페이스

    분개 승인/반려, 승인 요청 알림을 외부 서비스로 전송.
    """

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (INFO, WARNING, ERROR, CRITICAL)
            extra: 추가 데이터 (선택)

        Returns:
            전송 성공 여부
        """
        ...

    async def send_journal_notification(self, notification: Notification) -> bool:
        """분개 알림 전송 (포맷팅된 메시지)

        Args:
            notification: 알림 페이로드

        Returns:
            전송 성공 여부
        """
        ...
