"""
hey：执行一条命令，结束后把结果通知到 Slack / Twilio / Plivo。

典型用法：hey make release
"""

from .models import RunResult

__all__ = [
    "RunResult",
]
