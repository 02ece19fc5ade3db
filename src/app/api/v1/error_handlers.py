"""
FastAPI exception handlers that map app-level exceptions to HTTP responses.

Every client error is answered with status 400 (or the code-defined status) and
the literal exception message as a text/plain body, e.g.

    HTTP/1.1 400 Bad Request
    content-type: text/plain; charset=utf-8

    No such field as 'diet'
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
import logging
from app.exceptions.base import (
    RepositoryError,
    InvalidValueError,
    NoSuchFieldError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def _plain_text(exc: RepositoryError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=exc.http_status())


async def invalid_value_handler(request: Request, exc: InvalidValueError) -> PlainTextResponse:
    logger.info("InvalidValueError for %s %s: %s", request.method, request.url.path, exc.message,
                extra={"parameter": exc.parameter_name})
    return _plain_text(exc)


async def no_such_field_handler(request: Request, exc: NoSuchFieldError) -> PlainTextResponse:
    logger.info("NoSuchFieldError for %s %s: field=%r", request.method, request.url.path, exc.field_name)
    return _plain_text(exc)


async def not_found_handler(request: Request, exc: NotFoundError) -> PlainTextResponse:
    logger.info("NotFoundError for %s %s: %s", request.method, request.url.path, exc.message)
    return _plain_text(exc)


async def repository_error_handler(request: Request, exc: RepositoryError) -> PlainTextResponse:
    """
    Fallback for other repository errors (integrity failures, unknown fields,
    database outages). The message is already sanitized; DB internals never reach it.
    """
    level = logging.ERROR if exc.http_status() >= 500 else logging.WARNING
    logger.log(level, "RepositoryError for %s %s: %s", request.method, request.url.path, str(exc),
               extra=exc.to_payload())
    return _plain_text(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    """
    Unparseable path/query/body values are reported like InvalidValueError,
    for the first offending parameter:

    | Source              | Example          | Body                                        |
    | ------------------- | ---------------- | ------------------------------------------- |
    | path                | GET /cat/abc     | `Invalid value "abc" for parameter`         |
    | query, body         | top=x, age=-1    | `Invalid value "x" for parameter "top"`     |
    | missing query param | /cat/top3        | `Required parameter "fieldName" is missing` |

    Path parameter names are Python argument names, so they are left out.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = first.get("loc") or ("request",)
    name = str(loc[-1])
    if first.get("type") == "missing":
        error = InvalidValueError.missing(name)
    elif loc[0] == "path":
        error = InvalidValueError.unnamed(name, first.get("input"))
    else:
        error = InvalidValueError(name, first.get("input"))
    logger.info("RequestValidationError for %s %s: %s", request.method, request.url.path, error.message,
                extra={"error_count": len(errors)})
    return _plain_text(error)


# Helper to register all handlers on an app (called from the app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidValueError, invalid_value_handler)
    app.add_exception_handler(NoSuchFieldError, no_such_field_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
