"""
Mock 알림 서비스

INotifier 구현. 외부로 보내지 않고 메모리에 기록만 한다.
서비스/웹 테스트에서 "누구에게 어떤 알림이 갔는지" 검증용.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from core.domain.events import Notification
from core.utils.timezone import now_utc


@dataclass
class NotificationRecord:
    """발송 시도 한 건"""

    message: str
    level: str
    extra: dict[str, Any] | None
    timestamp: datetime
    sent: bool


class MockNotifier:
    """메모리 기록용 Notifier

    - notifications: send() 호출 기록 (분개 알림 포함)
    - journal_notifications: send_journal_notification()으로 받은 Notification

    Args:
        should_fail: True면 모든 발송이 False 반환 (발송 실패 시나리오)
    """

    def __init__(self, should_fail: bool = False):
        self.should_fail = should_fail
        self.notifications: list[NotificationRecord] = []
        self.journal_notifications: list[Notification] = []

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        sent = not self.should_fail
        self.notifications.append(
            NotificationRecord(message, level, extra, timestamp=now_utc(), sent=sent)
        )
        return sent

    async def send_journal_notification(self, notification: Notification) -> bool:
        self.journal_notifications.append(notification)
        return await self.send(notification.message, extra=notification.to_dict())

    def clear(self) -> None:
        self.notifications.clear()
        self.journal_notifications.clear()

    def get_by_type(self, kind: str) -> list[Notification]:
        """알림 유형별 조회 (journal_submitted / approval / rejection)"""
        return [n for n in self.journal_notifications if n.type == kind]

    def get_by_recipient(self, recipient: str) -> list[Notification]:
        return [n for n in self.journal_notifications if n.recipient == recipient]

    @property
    def last_notification(self) -> NotificationRecord | None:
        return self.notifications[-1] if self.notifications else None

    @property
    def message_count(self) -> int:
        return len(self.notifications)

    @property
    def sent_count(self) -> int:
        return sum(record.sent for record in self.notifications)

    @property
    def failed_count(self) -> int:
        return self.message_count - self.sent_count
