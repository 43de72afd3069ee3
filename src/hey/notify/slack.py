from __future__ import annotations

from dataclasses import dataclass

from ..http_utils import HttpError, post_json
from ..models import RunResult
from .base import Notifier
from .formatter import SLACK_DEFAULT_TEMPLATE, render_message


class WebhookError(RuntimeError):
    """webhook 请求失败（传输层错误或非 2xx 响应）。"""


@dataclass(slots=True)
class SlackNotifier(Notifier):
    """
    Slack 风格的 incoming webhook 通知。

    请求格式：POST application/json
      {"text": ..., "username": ..., "icon_url": ..., "icon_emoji": ...}
    其中 username/icon_url/icon_emoji 为空时不下发。
    """

    url: str
    template: str | None = None
    username: str | None = "Hey!"
    icon_url: str | None = None
    icon_emoji: str | None = None
    timeout_seconds: float | None = None

    def channel(self) -> str:
        return "slack"

    def send(self, result: RunResult) -> None:
        payload = self._build_payload(result)
        try:
            post_json(self.url, payload, timeout_seconds=self.timeout_seconds)
        except HttpError as e:
            raise WebhookError(f"Slack webhook failed: {e}") from e

    def _build_payload(self, result: RunResult) -> dict[str, object]:
        payload: dict[str, object] = {"text": render_message(self.template or SLACK_DEFAULT_TEMPLATE, result)}
        if self.icon_url:
            payload["icon_url"] = self.icon_url
        if self.icon_emoji:
            payload["icon_emoji"] = self.icon_emoji
        if self.username:
            payload["username"] = self.username
        return payload
