import logging
from types import SimpleNamespace

from app.core.logging.builder import make_dict_config, setup_logging
from app.core.logging.filters import RequestIdFilter


def make_settings(**overrides) -> SimpleNamespace:
    # Settings-like object; the builder only reads attributes
    values = dict(
        LOG_FORMAT="json",
        LOG_LEVEL="INFO",
        LOG_TO_STDOUT=True,
        LOG_DIR=None,
        LOG_MAX_BYTES=1000,
        LOG_BACKUP_COUNT=1,
        ENV="testing",
        ENABLE_SQL_LOGGING=False,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_stdout_mode_uses_console_handlers_only():
    cfg = make_dict_config(make_settings())

    assert set(cfg["handlers"]) == {"console", "error_console"}
    assert cfg["handlers"]["console"]["formatter"] == "json"
    assert set(cfg["formatters"]) == {"standard", "json"}
    assert set(cfg["filters"]) == {"request_id", "redact"}


def test_file_mode_adds_rotating_file_handlers(tmp_path):
    cfg = make_dict_config(make_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path))

    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"] == str(tmp_path / "app.log")
    assert cfg["handlers"]["error_file"]["level"] == "ERROR"
    assert cfg["loggers"][""]["handlers"] == ["console", "file", "error_file"]


def test_file_mode_without_dir_falls_back_to_console():
    cfg = make_dict_config(make_settings(LOG_TO_STDOUT=False, LOG_DIR=None))

    assert "file" not in cfg["handlers"]
    assert "error_console" in cfg["handlers"]


def test_text_format_uses_standard_formatter():
    cfg = make_dict_config(make_settings(LOG_FORMAT="text"))

    assert cfg["handlers"]["console"]["formatter"] == "standard"


def test_sql_logging_toggle():
    quiet = make_dict_config(make_settings())
    loud = make_dict_config(make_settings(ENABLE_SQL_LOGGING=True))

    assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert loud["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path):
    settings = make_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path / "logs")
    assert not settings.LOG_DIR.exists()

    setup_logging(settings)

    assert settings.LOG_DIR.exists()
    root = logging.getLogger()
    assert root.handlers
    assert any(isinstance(f, RequestIdFilter) for f in root.filters)
