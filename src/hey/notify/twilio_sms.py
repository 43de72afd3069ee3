from __future__ import annotations

from dataclasses import dataclass

from twilio.rest import Client

from ..models import RunResult
from .base import Notifier
from .formatter import SMS_DEFAULT_TEMPLATE, render_message


@dataclass(slots=True)
class TwilioNotifier(Notifier):
    """
    Twilio 短信通知：一次 send 对应一次 Messages.create 调用。

    默认模板会把命令行截断到 76 个字符，避免超出短信长度。
    """

    account_sid: str
    auth_token: str
    to: str
    from_: str
    template: str | None = None

    def channel(self) -> str:
        return "twilio"

    def send(self, result: RunResult) -> None:
        body = render_message(self.template or SMS_DEFAULT_TEMPLATE, result)
        client = Client(self.account_sid, self.auth_token)
        client.messages.create(to=self.to, from_=self.from_, body=body)
