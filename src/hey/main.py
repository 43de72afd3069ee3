from __future__ import annotations

import logging
import os
import sys

from .config import AppConfig, ConfigError, load_config, resolve_config_path
from .runner import build_notifiers, run_and_notify


LOG_LEVEL_ENV = "HEY_LOG_LEVEL"


def _resolve_log_level(value: str | None) -> int:
    v = (value or "").strip().upper()
    if not v:
        return logging.WARNING
    level = logging.getLevelNamesMapping().get(v)
    if isinstance(level, int):
        return level
    return logging.WARNING


def _notifiers_summary(notifiers) -> str:  # noqa: ANN001
    parts = [f"{type(n).__name__}({n.channel()})" for n in notifiers]
    return "; ".join(parts) if parts else "<none>"


def main(argv: list[str] | None = None) -> int:
    """
    hey <command> [args...]

    自身不解析任何参数，argv 原样作为要执行的命令。
    """
    args = list(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=_resolve_log_level(os.environ.get(LOG_LEVEL_ENV)),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger = logging.getLogger("hey")

    try:
        config_path = resolve_config_path()
        if config_path is None:
            logger.warning("no config file found; command will run without notifications")
            config = AppConfig()
        else:
            config = load_config(config_path)
    except ConfigError as e:
        logger.error("Error loading config: %s", e)
        return 1

    notifiers = build_notifiers(config)
    logger.info("config: path=%s notifiers=%s", config_path, _notifiers_summary(notifiers))
    return run_and_notify(args, notifiers)


if __name__ == "__main__":
    raise SystemExit(main())
