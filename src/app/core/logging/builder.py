"""
Turn Settings into a logging.dictConfig mapping and apply it.

| `LOG_TO_STDOUT` | `LOG_DIR` | Handlers on the root logger        |
| --------------- | --------- | ---------------------------------- |
| `true`          | any       | `console`, `error_console`         |
| `false`         | unset     | `console`, `error_console`         |
| `false`         | set       | `console`, `file`, `error_file`    |

`settings` is only read through attributes, so a SimpleNamespace works in tests.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from app.config.settings import Settings
from app.utils.logging import get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

DEFAULT_SERVICE_NAME = "cat-rest-service"
TEXT_LINE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def _build_handlers(settings: Settings) -> dict[str, dict]:
    handlers = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)
    return handlers


def _build_loggers(settings: Settings, handler_names: list[str]) -> dict[str, dict]:
    """
    Root plus the third-party loggers that need their own level.
    Access logs and SQL echo go to the console only.
    """
    sql_level = "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING"
    # name -> (level, handlers, propagate)
    table = {
        "": (settings.LOG_LEVEL, handler_names, True),
        "uvicorn.error": (settings.LOG_LEVEL, handler_names, False),
        "uvicorn.access": ("INFO", ["console"], False),
        "sqlalchemy.engine": (sql_level, ["console"], False),
    }
    return {
        name: {"level": level, "handlers": list(handlers), "propagate": propagate}
        for name, (level, handlers, propagate) in table.items()
    }


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping: "standard" and "json" formatters,
    "request_id" and "redact" filters, the handlers from _build_handlers()
    and the loggers from _build_loggers().
    """
    handlers = _build_handlers(settings)
    text_formatter = ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"()": text_formatter, "format": TEXT_LINE_FORMAT},
            "json": {
                "()": JsonFormatter,
                "env": settings.ENV,
                "service": get_project_name(default=DEFAULT_SERVICE_NAME),
            },
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": _build_loggers(settings, list(handlers)),
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging config, creating LOG_DIR first when files are written.
    Calling it again replaces the previous config.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    # %(request_id)s must resolve even for handlers added outside this config
    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for f in root.filters):
        root.addFilter(RequestIdFilter())
