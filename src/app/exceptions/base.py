"""
Domain exceptions shared by the validator, repository and service layers.

Each carries a client-safe `message`, which the HTTP layer returns verbatim as
a text/plain body, and an `error_code` that selects the status.
"""

from typing import Any, Iterable


class RepositoryError(Exception):
    """
    Root of the application's exceptions.

    Attributes:
        message: text shown to the client as-is.
        fields: field/parameter names involved, e.g. ["age"].
        constraint: DB constraint name; kept for logs, never sent to clients.
        error_code: short code such as "invalid_value" or "no_such_field".
    """

    DEFAULT_STATUS = 400
    # Codes not listed here (and errors without a code) are client errors.
    ERROR_CODE_TO_STATUS = {
        "invalid_value": 400,
        "invalid_field": 400,
        "no_such_field": 400,
        "not_found": 400,
        "integrity": 400,
        # the database itself failed (outage, driver error); not the caller's fault
        "database": 500,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> dict:
        """Log-friendly dict: detail, plus code and fields when present."""
        payload: dict[str, Any] = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        return self.ERROR_CODE_TO_STATUS.get(self.error_code or "", self.DEFAULT_STATUS)


class InvalidValueError(RepositoryError):
    """
    A caller-supplied value breaks a domain constraint (non-positive top, unknown id).

    Default message: `Invalid value "<value>" for parameter "<parameter_name>"`.
    Unknown ids use no_cat_with_id() instead.
    """

    def __init__(self, parameter_name: str, value: Any, message: str | None = None):
        self.parameter_name = parameter_name
        self.value = value
        if message is None:
            message = f'Invalid value "{value}" for parameter "{parameter_name}"'
        super().__init__(message, fields=[parameter_name], error_code="invalid_value")

    @classmethod
    def no_cat_with_id(cls, cat_id: Any) -> "InvalidValueError":
        return cls("id", cat_id, message=f"There is no cat with id = {cat_id}")

    @classmethod
    def unnamed(cls, parameter_name: str, value: Any) -> "InvalidValueError":
        """`Invalid value "<value>" for parameter`, for path values whose name is internal."""
        return cls(parameter_name, value, message=f'Invalid value "{value}" for parameter')

    @classmethod
    def missing(cls, parameter_name: str) -> "InvalidValueError":
        return cls(parameter_name, None, message=f'Required parameter "{parameter_name}" is missing')


class NoSuchFieldError(RepositoryError):
    """A field name that is not one of the entity's business fields."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"No such field as '{field_name}'", fields=[field_name], error_code="no_such_field")


class InvalidFieldError(RepositoryError):
    """Keyword arguments to a repository write that the model does not map."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, error_code="not_found")


__all__ = [
    "RepositoryError",
    "InvalidValueError",
    "NoSuchFieldError",
    "InvalidFieldError",
    "NotFoundError",
]
