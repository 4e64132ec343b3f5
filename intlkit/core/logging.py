"""Structured JSON logging for the library.

Provides a custom JSON formatter that outputs one JSON object per line
to stdout.  Extra fields (``event``, ``lang``, ``file``, ``key``, etc.)
are merged into each log record automatically.

Usage::

    from intlkit.core.logging import setup_logging
    setup_logging("INFO")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "event",
    "lang",
    "file",
    "key",
    "mode",
    "path",
)


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(log_level: str = "INFO") -> None:
    """Configure the ``intlkit`` logger to emit JSON lines to stdout.

    Only the library's own logger is touched so that a host application
    keeps control of the root logger.

    Args:
        log_level: Minimum log level name (e.g. ``"INFO"``, ``"DEBUG"``).
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    logger = logging.getLogger("intlkit")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(log_level.upper())
    logger.propagate = False
