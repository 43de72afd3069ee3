from __future__ import annotations

from typing import Protocol

from ..models import RunResult


class Notifier(Protocol):
    """
    通知接口：把一次执行结果发送到某个渠道。

    约定：
    - send 每次只发起一次外部调用，不做重试；失败抛异常，由 runner 统一收集
    - send 不得修改 result
    - channel() 用于日志与故障记录
    """

    def channel(self) -> str: ...

    def send(self, result: RunResult) -> None: ...
