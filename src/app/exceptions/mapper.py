"""
Turn database failures into RepositoryError.

integrity_classifier.py labels what failed; this module picks the message the
caller sees. Raw driver text only ever reaches DEBUG logs.

| Violation label           | Message raised                                  |
| ------------------------- | ----------------------------------------------- |
| `NotNullConstraintError`  | `Missing required field(s): <cols> for <Model>` |
| `CheckConstraintError`    | `<Model> business rule violated (check constraint).` |
| anything else             | `<Model> database integrity error.`             |
"""

import logging
import re
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base import RepositoryError
from .integrity_classifier import (
    CheckConstraintError,
    NotNullConstraintError,
    classify_integrity_error,
)

logger = logging.getLogger(__name__)

# Postgres: 'null value in column "age" of relation "cats" violates not-null constraint'
_PG_NULL_COLUMN = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
# SQLite: 'NOT NULL constraint failed: cats.age'
_SQLITE_NULL_COLUMNS = re.compile(r"NOT NULL constraint failed: (?P<cols>.+)$", re.IGNORECASE)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """Column names named in a NOT NULL failure, or None if the message has none."""
    text = str(exc.orig) if exc.orig is not None else str(exc)

    pg = _PG_NULL_COLUMN.search(text)
    if pg:
        return [pg.group("col")]

    lite = _SQLITE_NULL_COLUMNS.search(text)
    if lite:
        return [part.strip().rsplit(".", 1)[-1] for part in lite.group("cols").split(",")]

    return None


def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """Raise the RepositoryError (error_code "integrity") that corresponds to `exc`."""
    violation, constraint = classify_integrity_error(exc)
    model = model_name or "Record"
    context = {"model": model, "constraint": constraint, "violation": violation.__name__}

    if violation is NotNullConstraintError:
        columns = extract_columns_from_integrity(exc)
        logger.info("mapper.not_null_violation", extra={**context, "fields": columns})
        message = (
            f"Missing required field(s): {', '.join(columns)} for {model}"
            if columns else f"Missing required field for {model}"
        )
        raise RepositoryError(message, fields=columns, constraint=constraint, error_code="integrity") from exc

    if violation is CheckConstraintError:
        logger.info("mapper.check_violation", extra=context)
        logger.debug("mapper.check_violation.raw", extra={"model": model, "raw": str(exc.orig)})
        raise RepositoryError(
            f"{model} business rule violated (check constraint).",
            constraint=constraint, error_code="integrity",
        ) from exc

    logger.warning("mapper.unknown_integrity_error", extra=context)
    logger.debug("mapper.unknown_integrity_error.raw", extra={"model": model, "raw": str(exc.orig)})
    raise RepositoryError(f"{model} database integrity error.", error_code="integrity") from exc


async def _rollback(db: AsyncSession, model_name: str | None) -> None:
    # a failed rollback is logged; the original error is the one that propagates
    try:
        await db.rollback()
    except Exception:
        logger.exception("mapper.rollback_failed", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Wrap repository database calls:

        async with db_error_handler(self.db, "Cat"):
            await self.db.flush()

    RepositoryError passes through untouched. IntegrityError is rolled back and
    mapped; any other exception is rolled back and wrapped in RepositoryError
    with error_code "database" (served as 500).
    """
    try:
        yield
    except RepositoryError:
        raise
    except IntegrityError as exc:
        await _rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except Exception as exc:
        await _rollback(db, model_name)
        logger.exception("mapper.unexpected_db_error", extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}", error_code="database") from exc
