import logging

from app.core.logging.filters import RedactFilter, RequestIdFilter, reset_request_id, set_request_id


def make_record():
    # name, level, pathname, lineno, msg, args, exc_info
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello %s", ("world",), None)


def test_request_id_filter_defaults_to_dash():
    rec = make_record()
    token = set_request_id(None)
    try:
        assert RequestIdFilter().filter(rec) is True
        assert rec.request_id == "-"
    finally:
        reset_request_id(token)


def test_request_id_filter_uses_contextvar():
    rec = make_record()
    token = set_request_id("abc-123")
    try:
        RequestIdFilter().filter(rec)
    finally:
        reset_request_id(token)

    assert rec.request_id == "abc-123"


def test_request_id_filter_respects_record_extra():
    rec = make_record()
    rec.request_id = "explicit"
    token = set_request_id("context-id")
    try:
        RequestIdFilter().filter(rec)
    finally:
        reset_request_id(token)

    assert rec.request_id == "explicit"


def test_redact_filter_masks_sensitive_extras():
    rec = make_record()
    rec.password = "hunter2"
    rec.DATABASE_URL = "postgresql+asyncpg://cat:secret@db/cats"
    rec.field = "age"

    assert RedactFilter().filter(rec) is True

    assert rec.password == RedactFilter.MASK
    assert rec.DATABASE_URL == RedactFilter.MASK
    assert rec.field == "age"
