from __future__ import annotations

from dataclasses import dataclass

from plivo import RestClient

from ..models import RunResult
from .base import Notifier
from .formatter import SMS_DEFAULT_TEMPLATE, render_message


@dataclass(slots=True)
class PlivoNotifier(Notifier):
    """
    Plivo 短信通知：src/dst/text 组成一条消息，同步发送。
    """

    auth_id: str
    auth_token: str
    to: str
    from_: str
    template: str | None = None

    def channel(self) -> str:
        return "plivo"

    def send(self, result: RunResult) -> None:
        text = render_message(self.template or SMS_DEFAULT_TEMPLATE, result)
        client = RestClient(auth_id=self.auth_id, auth_token=self.auth_token)
        client.messages.create(src=self.from_, dst=self.to, text=text)
