"""
Whitelist validation of caller-supplied field names for Cat queries.

`fieldName` query parameters are never resolved with getattr() on the model.
They are matched (case-sensitive) against the CatField enum, and the
enum member is the key into a column table built once at import time.

| Field   | Sortable (top-N) | Aggregatable (total) |
| ------- | ---------------- | -------------------- |
| `name`  | yes              | no (sum of strings)  |
| `age`   | yes              | yes                  |

`id`, `created_on` and `updated_on` are not business fields and are rejected.
"""

from enum import Enum

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import InstrumentedAttribute

from app.exceptions.base import NoSuchFieldError
from app.models.cat import Cat

# Columns that exist on every row but are not business fields
NON_BUSINESS_COLUMNS = frozenset({"id", "created_on", "updated_on"})


class CatField(str, Enum):
    NAME = "name"
    AGE = "age"


# Built once at import; every query goes through this table.
FIELD_COLUMNS: dict[CatField, InstrumentedAttribute] = {
    CatField.NAME: Cat.name,
    CatField.AGE: Cat.age,
}

AGGREGATABLE_FIELDS: frozenset[CatField] = frozenset({CatField.AGE})

_FIELDS_BY_NAME: dict[str, CatField] = {field.value: field for field in CatField}


def business_columns(model) -> set[str]:
    """
    Names of the mapped columns of `model` that are business fields
    (everything except the identifier and the audit columns).
    """
    mapper = sa_inspect(model)
    return {attr.key for attr in mapper.column_attrs} - NON_BUSINESS_COLUMNS


def validate_field(field_name: str) -> CatField:
    """
    Return the CatField for `field_name`.

    Raises:
        NoSuchFieldError: if `field_name` is not exactly one of the business fields.
    """
    field = _FIELDS_BY_NAME.get(field_name)
    if field is None:
        raise NoSuchFieldError(field_name)
    return field


def validate_aggregatable_field(field_name: str) -> CatField:
    """
    Like validate_field(), restricted to fields that can be summed.

    "name" is a valid field but is still rejected here with NoSuchFieldError.
    """
    field = validate_field(field_name)
    if field not in AGGREGATABLE_FIELDS:
        raise NoSuchFieldError(field_name)
    return field


def column_for(field: CatField) -> InstrumentedAttribute:
    return FIELD_COLUMNS[field]


__all__ = [
    "CatField",
    "FIELD_COLUMNS",
    "AGGREGATABLE_FIELDS",
    "business_columns",
    "validate_field",
    "validate_aggregatable_field",
    "column_for",
]
