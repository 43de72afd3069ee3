from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .config import AppConfig
from .models import RunResult
from .notify.base import Notifier
from .notify.plivo_sms import PlivoNotifier
from .notify.slack import SlackNotifier
from .notify.twilio_sms import TwilioNotifier
from .process import run_command


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NotifyFailure:
    channel: str
    notifier_type: str
    error: Exception


def build_notifiers(config: AppConfig) -> tuple[Notifier, ...]:
    """
    根据配置构建通知渠道列表。

    顺序固定为 plivo -> twilio -> slack（短信在前，webhook 在后），
    与配置中出现哪些渠道无关；失败日志也按这个顺序输出。
    """
    notifiers: list[Notifier] = []
    if config.plivo:
        notifiers.append(
            PlivoNotifier(
                auth_id=config.plivo.auth_id,
                auth_token=config.plivo.auth_token,
                to=config.plivo.to,
                from_=config.plivo.from_,
                template=config.plivo.template,
            )
        )

    if config.twilio:
        notifiers.append(
            TwilioNotifier(
                account_sid=config.twilio.account_sid,
                auth_token=config.twilio.auth_token,
                to=config.twilio.to,
                from_=config.twilio.from_,
                template=config.twilio.template,
            )
        )

    if config.slack:
        notifiers.append(
            SlackNotifier(
                url=config.slack.url,
                template=config.slack.template,
                username=config.slack.username,
                icon_url=config.slack.icon_url,
                icon_emoji=config.slack.icon_emoji,
                timeout_seconds=config.slack.timeout_seconds,
            )
        )

    return tuple(notifiers)


def dispatch(notifiers: Sequence[Notifier], result: RunResult) -> tuple[NotifyFailure, ...]:
    """
    按顺序逐个调用 notifier.send；某个渠道失败不影响后续渠道。
    只返回失败的渠道（保持调用顺序），全部成功或列表为空时返回空元组。
    """
    failures: list[NotifyFailure] = []
    for notifier in notifiers:
        channel = notifier.channel()
        try:
            notifier.send(result)
        except Exception as e:  # noqa: BLE001
            failures.append(NotifyFailure(channel=channel, notifier_type=type(notifier).__name__, error=e))
            continue
        logger.debug("notify sent: channel=%s", channel)
    return tuple(failures)


def run_and_notify(args: Sequence[str], notifiers: Sequence[Notifier]) -> int:
    """
    执行命令 -> 逐个通知 -> 汇报失败 -> 计算退出码。

    退出码只区分成功与失败：命令失败或任一渠道失败都返回 1，
    子进程原始的退出码不会透传。
    """
    result = run_command(args)
    if result.error is not None:
        logger.warning("command did not run: command=%r error=%s", result.command, result.error)

    failures = dispatch(notifiers, result)
    for f in failures:
        logger.error(
            "notify failed: channel=%s notifier_type=%s error=%s: %s",
            f.channel,
            f.notifier_type,
            type(f.error).__name__,
            f.error,
        )

    if failures or not result.succeeded:
        return 1
    return 0
