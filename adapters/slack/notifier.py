"""
Slack 알림 서비스

Incoming Webhook으로 분개 승인 요청/승인/반려 알림 전송.

전송 실패(타임아웃, HTTP 오류, 200 외 응답)는 로그만 남기고 False 반환.
분개 처리 결과는 알림 성공 여부와 무관하다.
"""

import logging
from typing import TYPE_CHECKING, Any

import httpx

from core.domain.events import Notification
from core.ledger.types import NotificationType
from core.utils.timezone import format_utc, now_utc

if TYPE_CHECKING:
    from core.config.loader import SlackConfig

logger = logging.getLogger(__name__)

DEFAULT_EMOJI = ":bell:"
DEFAULT_COLOR = "#808080"

LEVEL_EMOJI = {
    "INFO": ":information_source:",
    "WARNING": ":warning:",
    "ERROR": ":x:",
    "CRITICAL": ":rotating_light:",
}

LEVEL_COLOR = {
    "INFO": "#439FE0",
    "WARNING": "#FFA500",
    "ERROR": "#FF0000",
    "CRITICAL": "#8B0000",
}

# 분개 알림 유형 → (이모지, 색상, 제목)
JOURNAL_STYLE: dict[str, tuple[str, str, str]] = {
    NotificationType.JOURNAL_SUBMITTED.value: (":inbox_tray:", "#439FE0", "승인 요청"),
    NotificationType.APPROVAL.value: (":white_check_mark:", "#36A64F", "분개 승인"),
    NotificationType.REJECTION.value: (":no_entry:", "#FF6B6B", "분개 반려"),
}

JOURNAL_COLOR = {kind: style[1] for kind, style in JOURNAL_STYLE.items()}


def _field(title: str, value: Any) -> dict[str, Any]:
    return {"title": title, "value": str(value), "short": True}


class SlackNotifier:
    """Slack Webhook Notifier (INotifier 구현)

    httpx.AsyncClient는 첫 전송 시 생성해 재사용하고 close()에서 정리한다.

    사용 예시:
    ```python
    async with SlackNotifier(webhook_url, channel="#accounting") as notifier:
        await notifier.send_journal_notification(notification)
    ```

    Args:
        webhook_url: Slack Incoming Webhook URL
        channel: 채널 오버라이드 (None이면 Webhook 기본 채널)
        username: 메시지 발송자 이름 (회사명)
        timeout: HTTP 타임아웃 (초)
    """

    def __init__(
        self,
        webhook_url: str,
        channel: str | None = None,
        username: str = "Ledgerbook",
        timeout: float = 10.0,
    ):
        if not webhook_url:
            raise ValueError("webhook_url은 필수입니다")

        self.webhook_url = webhook_url
        self.channel = channel
        self.username = username
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        client, self._client = self._client, None
        if client is not None and not client.is_closed:
            await client.aclose()

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """운영 알림 (재전기 후 남은 미전기 분개 등)

        extra는 attachment field로 표시.
        """
        attachment: dict[str, Any] = {
            "color": LEVEL_COLOR.get(level, DEFAULT_COLOR),
            "text": f"{LEVEL_EMOJI.get(level, DEFAULT_EMOJI)} *[{level}]* {message}",
        }
        if extra:
            attachment["fields"] = [_field(key, value) for key, value in extra.items()]
        return await self._post(attachment)

    async def send_journal_notification(self, notification: Notification) -> bool:
        """분개 알림 (승인 요청/승인/반려)"""
        emoji, color, title = JOURNAL_STYLE.get(
            notification.type, (DEFAULT_EMOJI, DEFAULT_COLOR, notification.type)
        )
        return await self._post({
            "color": color,
            "title": f"{emoji} {title}",
            "text": notification.message,
            "fields": [
                _field("수신자", notification.recipient),
                _field("분개 ID", notification.entry_id),
            ],
        })

    async def _post(self, attachment: dict[str, Any]) -> bool:
        attachment["footer"] = f"{self.username} | {format_utc(now_utc())}"
        payload: dict[str, Any] = {"username": self.username, "attachments": [attachment]}
        if self.channel:
            payload["channel"] = self.channel

        try:
            client = await self._get_client()
            response = await client.post(self.webhook_url, json=payload)
        except httpx.TimeoutException:
            logger.error("Slack 알림 전송 타임아웃")
            return False
        except httpx.HTTPError as e:
            logger.error(f"Slack 알림 전송 HTTP 에러: {e}")
            return False

        if response.status_code != 200:
            logger.warning(f"Slack 알림 전송 실패: status={response.status_code}, body={response.text}")
            return False
        return True

    async def __aenter__(self) -> "SlackNotifier":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def build_notifier(slack: "SlackConfig", username: str) -> SlackNotifier | None:
    """설정에서 Slack Notifier 생성 (webhook 미설정 시 None)"""
    if not slack.enabled:
        return None
    return SlackNotifier(webhook_url=slack.webhook_url, channel=slack.channel, username=username)
