"""Logging setup for Custodian.

Modules log through ``logging.getLogger(__name__)``; applications call
``configure_logging`` once at startup.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .defaults import ENV_LOG_LEVEL, LOG_LEVELS
from .exceptions import ConfigException

_HANDLER_NAME = "custodian"


class JSONFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: str | int = "INFO", json_format: bool = False) -> logging.Logger:
    """Install a stream handler on the ``custodian`` logger.

    Calling this again replaces the previous handler rather than stacking a
    second one.

    Args:
        level: Level name or number.
        json_format: Use ``JSONFormatter`` instead of the plain text format.

    Returns:
        The configured package logger.

    Raises:
        ConfigException: If ``level`` is not a known level name.
    """
    if isinstance(level, str):
        level = level.upper()
        if level not in LOG_LEVELS:
            raise ConfigException(
                f"Unknown log level {level!r}; expected one of {', '.join(LOG_LEVELS)}",
                setting=ENV_LOG_LEVEL,
            )

    logger = logging.getLogger("custodian")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``custodian`` namespace."""
    if name != "custodian" and not name.startswith("custodian."):
        name = f"custodian.{name}"
    return logging.getLogger(name)
