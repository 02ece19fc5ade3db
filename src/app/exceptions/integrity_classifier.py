"""
Name the kind of constraint behind a SQLAlchemy IntegrityError.

The cats table has no unique or foreign keys, so only two violations are
expected: NOT NULL (name/age missing) and CHECK (age below zero). The classes
below are labels for mapper.py; they are never raised to callers.
"""

import logging
from typing import Type

from sqlalchemy.exc import IntegrityError

from .base import RepositoryError

logger = logging.getLogger(__name__)


class ConstraintViolationError(RepositoryError):
    """Common parent of the violation labels."""


class NotNullConstraintError(ConstraintViolationError):
    pass


class CheckConstraintError(ConstraintViolationError):
    pass


class UnknownIntegrityError(ConstraintViolationError):
    pass


ViolationType = Type[ConstraintViolationError]

# SQLSTATE class 23, https://www.postgresql.org/docs/current/errcodes-appendix.html
SQLSTATE_VIOLATIONS: dict[str, ViolationType] = {
    "23502": NotNullConstraintError,
    "23514": CheckConstraintError,
}

# Lower-cased message fragments for drivers that report no SQLSTATE (SQLite)
MESSAGE_VIOLATIONS: tuple[tuple[str, ViolationType], ...] = (
    ("not null constraint", NotNullConstraintError),
    ("null value in column", NotNullConstraintError),
    ("check constraint", CheckConstraintError),
)


def _sqlstate(orig) -> str | None:
    # asyncpg exposes `sqlstate`, psycopg exposes `pgcode`
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _constraint_name(orig) -> str | None:
    name = getattr(orig, "constraint_name", None)
    diag = getattr(orig, "diag", None)
    if name is None and diag is not None:
        name = getattr(diag, "constraint_name", None)
    return name


def classify_integrity_error(exc: IntegrityError) -> tuple[ViolationType, str | None]:
    """
    Return (violation label, constraint name or None).

    The SQLSTATE decides when the driver supplies one, the message text otherwise.
    """
    orig = exc.orig
    constraint = _constraint_name(orig)
    code = _sqlstate(orig)

    if code:
        violation = SQLSTATE_VIOLATIONS.get(code, UnknownIntegrityError)
        logger.debug(
            "integrity.classified",
            extra={"sqlstate": code, "constraint": constraint, "violation": violation.__name__},
        )
        return violation, constraint

    text = str(orig).lower()
    for fragment, violation in MESSAGE_VIOLATIONS:
        if fragment in text:
            return violation, constraint

    logger.warning("integrity.unrecognized", extra={"message_snippet": text[:200]})
    return UnknownIntegrityError, constraint
