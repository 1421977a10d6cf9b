"""
Logging configuration.

The packaged YAML config (`src/datenight/config/logging.yaml`) is applied with
`dictConfig`, using the level from settings (`DATENIGHT_LOG_LEVEL`).

httpx logs every provider request at INFO; a single search fans out to several
providers, so those loggers stay at WARNING unless the app runs at DEBUG.
"""

from __future__ import annotations

import copy
import logging.config
from typing import Any

from datenight.config.settings import get_logging_config, get_settings

CHATTY_HTTP_LOGGERS = ("httpx", "httpcore")


def _with_level(config: dict[str, Any], level: str) -> dict[str, Any]:
    # The loader is cached; never mutate the shared mapping.
    config = copy.deepcopy(config)
    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = level

    http_level = level if level == "DEBUG" else "WARNING"
    loggers = config.setdefault("loggers", {})
    for name in CHATTY_HTTP_LOGGERS:
        loggers.setdefault(name, {})["level"] = http_level
    return config


def configure_logging(level: str | None = None) -> None:
    """Apply the packaged logging config; `level` overrides the settings level."""
    level = (level or get_settings().app.log_level).upper()
    logging.config.dictConfig(_with_level(get_logging_config(), level))
