"""
Mock Notifier 테스트
"""

import pytest

from adapters.interfaces import INotifier
from adapters.mock.notifier import MockNotifier
from core.domain.events import Notification


def _notification(kind: str = "approval", recipient: str = "kim@example.com") -> Notification:
    return Notification(recipient=recipient, message="msg", type=kind, entry_id="je-001")


class TestMockNotifier:
    """MockNotifier 테스트"""

    def test_implements_inotifier_protocol(self) -> None:
        assert isinstance(MockNotifier(), INotifier)

    @pytest.mark.asyncio
    async def test_records_send(self) -> None:
        notifier = MockNotifier()

        assert await notifier.send("테스트 메시지", level="ERROR") is True

        assert notifier.message_count == 1
        assert notifier.last_notification.message == "테스트 메시지"
        assert notifier.last_notification.level == "ERROR"

    @pytest.mark.asyncio
    async def test_journal_notification(self) -> None:
        notifier = MockNotifier()

        await notifier.send_journal_notification(_notification("journal_submitted", "manager"))
        await notifier.send_journal_notification(_notification("approval"))

        assert len(notifier.get_by_type("approval")) == 1
        assert len(notifier.get_by_recipient("manager")) == 1
        assert notifier.last_notification.extra["entry_id"] == "je-001"

    @pytest.mark.asyncio
    async def test_should_fail(self) -> None:
        notifier = MockNotifier(should_fail=True)

        assert await notifier.send_journal_notification(_notification()) is False

        assert notifier.failed_count == 1
        assert notifier.sent_count == 0

    @pytest.mark.asyncio
    async def test_clear(self) -> None:
        notifier = MockNotifier()
        await notifier.send_journal_notification(_notification())

        notifier.clear()

        assert notifier.message_count == 0
        assert notifier.journal_notifications == []
        assert notifier.last_notification is None
