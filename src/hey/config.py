from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping


CONFIG_ENV = "HEY_CONFIG"
CONFIG_FILENAME = ".hey.toml"


class ConfigError(ValueError):
    """配置文件不可读或格式错误：启动即失败，不会执行任何命令。"""


def _require_dict(value: Any, *, where: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"Expected table at {where}, got {type(value).__name__}")
    return value


def _get_str(d: Mapping[str, Any], key: str, default: str | None = None) -> str | None:
    v = d.get(key, default)
    if v is None:
        return None
    return str(v)


def _get_float(d: Mapping[str, Any], key: str, *, where: str) -> float | None:
    v = d.get(key)
    if v is None:
        return None
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ConfigError(f"Expected number at {where}.{key}, got {type(v).__name__}")
    return float(v)


def _get_secret(d: Mapping[str, Any], key: str, *, where: str) -> str:
    """
    敏感字段既可直接写值，也可用 <key>_env 指定环境变量名；两者都有时直接写的值优先。
    """
    value = _get_str(d, key)
    if value:
        return value
    env_name = _get_str(d, f"{key}_env")
    if env_name:
        value = os.environ.get(env_name)
        if value:
            return value
        raise ConfigError(f"Environment variable {env_name} referenced by {where}.{key}_env is not set")
    raise ConfigError(f"Missing required field {where}.{key}")


def _require_str(d: Mapping[str, Any], key: str, *, where: str) -> str:
    value = _get_str(d, key)
    if not value:
        raise ConfigError(f"Missing required field {where}.{key}")
    return value


@dataclass(frozen=True, slots=True)
class SlackNotifyConfig:
    """
    Slack 风格 webhook 配置。

    url：incoming webhook 地址（可用 url_env）
    username / icon_url / icon_emoji：可选的展示名与头像
    timeout_seconds：单次请求超时；不配置则一直等待
    """

    url: str
    template: str | None = None
    username: str | None = "Hey!"
    icon_url: str | None = None
    icon_emoji: str | None = None
    timeout_seconds: float | None = None


@dataclass(frozen=True, slots=True)
class TwilioNotifyConfig:
    account_sid: str
    auth_token: str
    to: str
    from_: str
    template: str | None = None


@dataclass(frozen=True, slots=True)
class PlivoNotifyConfig:
    auth_id: str
    auth_token: str
    to: str
    from_: str
    template: str | None = None


@dataclass(frozen=True, slots=True)
class AppConfig:
    """
    应用总配置：三个渠道各自可选，缺省即表示该渠道关闭。
    """

    slack: SlackNotifyConfig | None = None
    twilio: TwilioNotifyConfig | None = None
    plivo: PlivoNotifyConfig | None = None


def resolve_config_path(environ: Mapping[str, str] | None = None) -> Path | None:
    """
    配置文件查找顺序：
    - 环境变量 HEY_CONFIG（显式指定时文件必须存在）
    - ~/.hey.toml
    - 当前工作目录下的 .hey.toml
    都不存在时返回 None，表示没有任何通知渠道。
    """
    environ = os.environ if environ is None else environ
    explicit = environ.get(CONFIG_ENV)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ConfigError(f"Config file from {CONFIG_ENV} does not exist: {path}")
        return path

    for candidate in (Path.home() / CONFIG_FILENAME, Path.cwd() / CONFIG_FILENAME):
        if candidate.is_file():
            return candidate
    return None


def parse_config(raw: Mapping[str, Any]) -> AppConfig:
    root = _require_dict(raw, where="$")

    slack_cfg: SlackNotifyConfig | None = None
    if "slack" in root:
        sl = _require_dict(root["slack"], where="$.slack")
        slack_cfg = SlackNotifyConfig(
            url=_get_secret(sl, "url", where="$.slack"),
            template=_get_str(sl, "template"),
            username=_get_str(sl, "username", "Hey!"),
            icon_url=_get_str(sl, "icon_url"),
            icon_emoji=_get_str(sl, "icon_emoji"),
            timeout_seconds=_get_float(sl, "timeout_seconds", where="$.slack"),
        )

    twilio_cfg: TwilioNotifyConfig | None = None
    if "twilio" in root:
        tw = _require_dict(root["twilio"], where="$.twilio")
        twilio_cfg = TwilioNotifyConfig(
            account_sid=_get_secret(tw, "account_sid", where="$.twilio"),
            auth_token=_get_secret(tw, "auth_token", where="$.twilio"),
            to=_require_str(tw, "to", where="$.twilio"),
            from_=_require_str(tw, "from", where="$.twilio"),
            template=_get_str(tw, "template"),
        )

    plivo_cfg: PlivoNotifyConfig | None = None
    if "plivo" in root:
        pl = _require_dict(root["plivo"], where="$.plivo")
        plivo_cfg = PlivoNotifyConfig(
            auth_id=_get_secret(pl, "auth_id", where="$.plivo"),
            auth_token=_get_secret(pl, "auth_token", where="$.plivo"),
            to=_require_str(pl, "to", where="$.plivo"),
            from_=_require_str(pl, "from", where="$.plivo"),
            template=_get_str(pl, "template"),
        )

    return AppConfig(slack=slack_cfg, twilio=twilio_cfg, plivo=plivo_cfg)


def load_config(config_path: str | os.PathLike[str]) -> AppConfig:
    """
    读取 TOML 配置（示意）：

    [slack]
    url = "https://hooks.slack.com/services/..."

    [twilio]
    account_sid = "AC..."
    auth_token_env = "TWILIO_AUTH_TOKEN"
    to = "+15551230000"
    from = "+15559870000"

    [plivo]
    auth_id = "MA..."
    auth_token = "..."
    to = "15551230000"
    from = "15559870000"
    template = "{{ result.command|truncatechars(40) }} done"
    """
    try:
        with open(config_path, "rb") as f:
            raw = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Malformed config file {config_path}: {e}") from e
    return parse_config(raw)
