from __future__ import annotations

from datetime import datetime, timedelta

import jinja2

from ..models import RunResult


DEFAULT_TIME_FORMAT = "%Y/%m/%d %I:%M:%S%p"

SLACK_DEFAULT_TEMPLATE = (
    "{% if result.succeeded %}:thumbsup:{% else %}:thumbsdown:{% endif %}"
    " Finished `{{ result.command }}` at {{ result.end|time }} in {{ result.duration|duration }}"
)

SMS_DEFAULT_TEMPLATE = (
    "Finished `{{ result.command|truncatechars(76) }}` at {{ result.end|time }}"
    " in {{ result.duration|duration }}"
)


class TemplateRenderError(ValueError):
    """自定义模板语法错误或引用了不存在的变量。"""


def format_time(value: datetime | None, pattern: str = DEFAULT_TIME_FORMAT) -> str:
    if value is None:
        return "-"
    return value.strftime(pattern)


def format_duration(value: timedelta) -> str:
    """
    人类可读的耗时：1h02m03s / 1m02s / 4.21s。
    """
    total = round(max(0.0, value.total_seconds()), 2)
    hours, rest = divmod(int(total), 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes:02d}m{seconds:02d}s"
    if minutes:
        return f"{minutes}m{seconds:02d}s"
    return f"{total:.2f}s"


def truncatechars(value: object, length: int) -> str:
    """
    截断到最多 length 个字符；超长时保留 length-3 个字符并补 "..."。
    """
    text = str(value)
    length = int(length)
    if len(text) <= length:
        return text
    if length < 3:
        return text[: max(0, length)]
    return text[: length - 3] + "..."


def _build_environment() -> jinja2.Environment:
    env = jinja2.Environment(
        autoescape=False,
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["time"] = format_time
    env.filters["duration"] = format_duration
    env.filters["truncatechars"] = truncatechars
    return env


_ENV = _build_environment()


def render_message(template: str, result: RunResult) -> str:
    """
    用 RunResult 渲染消息模板，模板内唯一的变量为 result。

    模板能力：
    - {% if result.succeeded %}...{% else %}...{% endif %}
    - {{ result.command }} / {{ result.end|time("%H:%M") }} / {{ result.duration|duration }}
    - {{ result.command|truncatechars(76) }}
    """
    try:
        return _ENV.from_string(template).render(result=result)
    except (jinja2.TemplateError, AttributeError, TypeError, ValueError) as e:
        raise TemplateRenderError(f"failed to render template: {e}") from e
