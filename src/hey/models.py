from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


def local_now() -> datetime:
    """
    带本地时区的当前时间：消息中展示给用户的时间按本机时区渲染。
    """
    return datetime.now().astimezone()


class NoCommandError(ValueError):
    """命令行没有给出要执行的命令。"""


@dataclass(frozen=True, slots=True)
class RunResult:
    """
    一次子进程执行的结果（不可变），由 run_command 生成后交给所有 Notifier。

    字段约定：
    - args：命令与参数，原样保留；仅在未提供命令时为空
    - start / end：spawn 前与进程退出（或 spawn 失败）后立即取的时间；
      未执行任何进程时 end 为 None
    - succeeded：进程确实启动且退出码为 0
    - returncode：进程的原始退出码（仅供展示，退出策略只看 succeeded）
    - error：spawn 失败或未提供命令；非 0 退出码不算 error
    """

    args: tuple[str, ...]
    start: datetime
    end: datetime | None = None
    succeeded: bool = False
    returncode: int | None = None
    error: BaseException | None = None

    @property
    def command(self) -> str:
        return " ".join(self.args)

    @property
    def duration(self) -> timedelta:
        if self.end is None:
            return timedelta(0)
        return self.end - self.start
