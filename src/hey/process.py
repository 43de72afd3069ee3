from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from .models import NoCommandError, RunResult, local_now


logger = logging.getLogger(__name__)


def run_command(args: Sequence[str]) -> RunResult:
    """
    执行子进程并阻塞等待其退出。

    - 子进程继承当前进程的 stdin/stdout/stderr
    - start 在 spawn 前记录，end 在进程退出（或 spawn 失败）后立即记录
    - 未提供命令时不 spawn，直接返回带 NoCommandError 的结果
    """
    args = tuple(str(a) for a in args)
    start = local_now()
    if not args:
        return RunResult(args=args, start=start, error=NoCommandError("you must supply a command to run"))

    logger.debug("spawn: command=%r", args)
    try:
        proc = subprocess.run(args, check=False)  # noqa: S603
    except OSError as e:
        end = local_now()
        logger.debug("spawn failed: command=%r error=%s", args, e)
        return RunResult(args=args, start=start, end=end, succeeded=False, error=e)
    end = local_now()

    logger.debug(
        "exited: command=%r returncode=%d duration=%s",
        args,
        proc.returncode,
        end - start,
    )
    return RunResult(
        args=args,
        start=start,
        end=end,
        succeeded=proc.returncode == 0,
        returncode=proc.returncode,
    )
