from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.exceptions.base import InvalidValueError, NoSuchFieldError, NotFoundError, RepositoryError
from app.exceptions.integrity_classifier import (
    CheckConstraintError,
    NotNullConstraintError,
    UnknownIntegrityError,
    classify_integrity_error,
)
from app.exceptions.mapper import db_error_handler, extract_columns_from_integrity, raise_mapped_integrity_error


class FakePostgresError(Exception):
    """Shape of an asyncpg error as seen through SQLAlchemy: sqlstate + constraint_name."""

    def __init__(self, message: str, sqlstate: str, constraint_name: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name


def integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO cats ...", {}, orig)


class TestClassifyIntegrityError:
    def test_postgres_not_null(self):
        orig = FakePostgresError('null value in column "age" of relation "cats"', "23502")

        assert classify_integrity_error(integrity_error(orig)) == (NotNullConstraintError, None)

    def test_postgres_check_keeps_constraint_name(self):
        orig = FakePostgresError("violates check constraint", "23514", "ck_cats_age_non_negative")

        assert classify_integrity_error(integrity_error(orig)) == (CheckConstraintError, "ck_cats_age_non_negative")

    def test_postgres_unknown_sqlstate(self):
        orig = FakePostgresError("duplicate key", "23505")

        violation, _ = classify_integrity_error(integrity_error(orig))

        assert violation is UnknownIntegrityError

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("NOT NULL constraint failed: cats.name", NotNullConstraintError),
            ("CHECK constraint failed: ck_cats_age_non_negative", CheckConstraintError),
            ("something else entirely", UnknownIntegrityError),
        ],
    )
    def test_sqlite_messages(self, text, expected):
        violation, constraint = classify_integrity_error(integrity_error(Exception(text)))

        assert violation is expected
        assert constraint is None


class TestRaiseMappedIntegrityError:
    """
    Behavior:
      - Every mapped error is a RepositoryError with error_code "integrity".
      - Messages name the model and, for NOT NULL, the columns; never the raw driver text.
    """

    def test_not_null_lists_columns(self):
        exc = integrity_error(Exception("NOT NULL constraint failed: cats.age"))

        with pytest.raises(RepositoryError) as exc_info:
            raise_mapped_integrity_error(exc, "Cat")

        assert exc_info.value.message == "Missing required field(s): age for Cat"
        assert exc_info.value.fields == ["age"]
        assert exc_info.value.error_code == "integrity"

    def test_check_violation(self):
        exc = integrity_error(Exception("CHECK constraint failed: ck_cats_age_non_negative"))

        with pytest.raises(RepositoryError, match=r"Cat business rule violated \(check constraint\)\."):
            raise_mapped_integrity_error(exc, "Cat")

    def test_unknown_violation_hides_driver_text(self):
        exc = integrity_error(Exception("weird driver failure"))

        with pytest.raises(RepositoryError) as exc_info:
            raise_mapped_integrity_error(exc)

        assert exc_info.value.message == "Record database integrity error."
        assert "weird" not in exc_info.value.message


@pytest.mark.parametrize(
    "text, expected",
    [
        ('null value in column "name" of relation "cats" violates not-null constraint', ["name"]),
        ("NOT NULL constraint failed: cats.name, cats.age", ["name", "age"]),
        ("CHECK constraint failed: ck_cats_age_non_negative", None),
    ],
)
def test_extract_columns_from_integrity(text, expected):
    assert extract_columns_from_integrity(integrity_error(Exception(text))) == expected


class TestDomainErrors:
    def test_invalid_value_default_message(self):
        err = InvalidValueError("top", -2)

        assert str(err) == 'Invalid value "-2" for parameter "top"'
        assert err.http_status() == 400
        assert err.to_payload() == {"detail": str(err), "code": "invalid_value", "fields": ["top"]}

    def test_no_cat_with_id(self):
        err = InvalidValueError.no_cat_with_id(7)

        assert err.message == "There is no cat with id = 7"
        assert err.parameter_name == "id"
        assert err.value == 7

    def test_no_such_field(self):
        err = NoSuchFieldError("diet")

        assert str(err) == "No such field as 'diet'"
        assert err.error_code == "no_such_field"

    def test_not_found_status(self):
        assert NotFoundError("There are no records in data base").http_status() == 400

    def test_invalid_value_for_unnamed_parameter(self):
        assert str(InvalidValueError.unnamed("cat_id", "*")) == 'Invalid value "*" for parameter'

    def test_missing_parameter(self):
        err = InvalidValueError.missing("fieldName")

        assert err.message == 'Required parameter "fieldName" is missing'
        assert err.http_status() == 400

    def test_uncoded_error_defaults_to_400(self):
        assert RepositoryError("boom").http_status() == 400


@pytest.mark.asyncio
class TestDbErrorHandler:
    """
    db_error_handler rolls the session back on any failure. Integrity failures
    stay client errors; everything else is a "database" error served as 500.
    """

    async def test_operational_error_is_a_server_error(self):
        session = AsyncMock()

        with pytest.raises(RepositoryError) as exc_info:
            async with db_error_handler(session, "Cat"):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        assert exc_info.value.message == "Failed to operate on Cat"
        assert exc_info.value.error_code == "database"
        assert exc_info.value.http_status() == 500
        session.rollback.assert_awaited_once()

    async def test_integrity_error_stays_a_client_error(self):
        session = AsyncMock()

        with pytest.raises(RepositoryError) as exc_info:
            async with db_error_handler(session, "Cat"):
                raise integrity_error(Exception("CHECK constraint failed: ck_cats_age_non_negative"))

        assert exc_info.value.http_status() == 400
        session.rollback.assert_awaited_once()

    async def test_domain_errors_pass_through_without_rollback(self):
        session = AsyncMock()

        with pytest.raises(NoSuchFieldError):
            async with db_error_handler(session, "Cat"):
                raise NoSuchFieldError("diet")

        session.rollback.assert_not_awaited()
