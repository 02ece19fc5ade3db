"""
Filters attached to every handler. They annotate records and never drop them.

The request id lives in a ContextVar: RequestIDMiddleware sets it once per
request and every await inside that request sees the same value.
"""

import contextvars
import logging

NO_REQUEST_ID = "-"

_current_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "current_request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Bind `request_id` to the running context. Pass the token to reset_request_id()."""
    return _current_request_id.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _current_request_id.reset(token)


def get_request_id() -> str | None:
    return _current_request_id.get()


class RequestIdFilter(logging.Filter):
    """
    Stamp `record.request_id`. Precedence: `extra={"request_id": ...}`,
    then the context value, then "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        explicit = getattr(record, "request_id", None)
        record.request_id = explicit or get_request_id() or NO_REQUEST_ID
        return True


class RedactFilter(logging.Filter):
    """Mask `extra` attributes whose name (case-insensitive) is in SENSITIVE."""

    SENSITIVE = frozenset(
        {"password", "secret", "token", "authorization", "database_url", "postgres_password"}
    )
    MASK = "***REDACTED***"

    def filter(self, record: logging.LogRecord) -> bool:
        hits = [key for key in vars(record) if key.lower() in self.SENSITIVE]
        for key in hits:
            setattr(record, key, self.MASK)
        return True
