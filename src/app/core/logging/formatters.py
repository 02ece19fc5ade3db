"""
Formatters referenced from the dictConfig in builder.py.

JsonFormatter writes one object per line for log shipping; ColorFormatter is
for reading logs in a terminal during development.
"""

import json
import logging
from typing import Any

from app.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# Attribute names every LogRecord has; whatever else is on a record came from `extra`.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonFormatter(logging.Formatter):
    """
    Fixed keys (timestamp, level, logger, message, request_id, service, env,
    version, source location) followed by the record's `extra` fields.
    Extras that json cannot encode are written as str().
    """

    def __init__(self, *, env: str | None = None, service: str = "cat-rest-service",
                 datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
            "pathname": record.pathname,
            "lineno": record.lineno,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)

        extras = {
            key: _jsonable(value)
            for key, value in vars(record).items()
            if key not in payload and key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        payload.update(extras)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    `time | LEVEL | logger | request_id | message`, level name in color.
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",        # cyan
        "INFO": "\033[32m",         # green
        "WARNING": "\033[33m",      # yellow
        "ERROR": "\033[31m",        # red
        "CRITICAL": "\033[1;41m",   # bold, red background
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        level = f"{color}{record.levelname:<8}{self.COLOR_CODES['RESET']}"
        parts = [
            self.formatTime(record, self.datefmt),
            level,
            f"{record.name:<28}",
            f"{getattr(record, 'request_id', '-'):<36}",
            record.getMessage(),
        ]
        line = " | ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
