import os
import sys
from datetime import datetime, timedelta, timezone

import pytest


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from hey.models import RunResult  # noqa: E402


@pytest.fixture
def make_result():
    """
    构造固定时间的 RunResult，默认 2026-02-10 13:04:05 开始、耗时 62 秒、成功。
    """

    def _make(
        args: tuple[str, ...] = ("echo", "hi"),
        *,
        seconds: float = 62,
        succeeded: bool = True,
        returncode: int | None = 0,
        error: BaseException | None = None,
    ) -> RunResult:
        start = datetime(2026, 2, 10, 13, 4, 5, tzinfo=timezone.utc)
        return RunResult(
            args=args,
            start=start,
            end=start + timedelta(seconds=seconds),
            succeeded=succeeded,
            returncode=returncode,
            error=error,
        )

    return _make
