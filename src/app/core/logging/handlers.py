"""
Handler entries for the "handlers" section of the dictConfig built in builder.py.

Every factory returns a plain dict; nothing is opened until dictConfig runs.
Formatter names ("json", "standard") and filter names ("request_id", "redact")
refer to entries of the same config.
"""

from pathlib import Path

from app.config.settings import Settings

ATTACHED_FILTERS = ("request_id", "redact")
APP_LOG_FILE = "app.log"
ERROR_LOG_FILE = "errors.log"


def _main_formatter(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def _stream(level: str, formatter: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "level": level,
        "formatter": formatter,
        "filters": list(ATTACHED_FILTERS),
    }


def _rotating(settings: Settings, filename: str, level: str, formatter: str) -> dict:
    entry = _stream(level, formatter)
    entry.update(
        {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(Path(settings.LOG_DIR) / filename),
            "maxBytes": settings.LOG_MAX_BYTES,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }
    )
    return entry


def get_console_handler(settings: Settings) -> dict:
    """stderr, everything at or above LOG_LEVEL."""
    return _stream(settings.LOG_LEVEL, _main_formatter(settings))


def get_file_handler(settings: Settings) -> dict:
    return _rotating(settings, APP_LOG_FILE, settings.LOG_LEVEL, _main_formatter(settings))


# The two error handlers always write JSON, whatever LOG_FORMAT says.

def get_error_file_handler(settings: Settings) -> dict:
    return _rotating(settings, ERROR_LOG_FILE, "ERROR", "json")


def get_error_console_handler(settings: Settings) -> dict:
    return _stream("ERROR", "json")
