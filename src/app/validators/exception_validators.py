"""
Payload checks BaseRepository runs before a write, so a bad payload fails with
a readable RepositoryError instead of a driver IntegrityError.
"""

from sqlalchemy import inspect as sa_inspect


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """Keys of `kwargs` that are not mapped attributes of the model class, sorted."""
    known = set(sa_inspect(model).attrs.keys())
    return sorted(set(kwargs) - known)


def get_required_columns(model) -> list[str]:
    """
    NOT NULL columns the caller has to supply: no client or server default and
    not an auto-increment primary key. For Cat: ["name", "age"].
    """
    def supplied_by_db(col) -> bool:
        if col.default is not None or col.server_default is not None:
            return True
        return col.primary_key and col.autoincrement in (True, "auto")

    return [col.name for col in model.__table__.columns if not col.nullable and not supplied_by_db(col)]


def find_missing_required(model, kwargs: dict) -> list[str]:
    """Required columns that are absent from `kwargs` or explicitly None."""
    return [c for c in get_required_columns(model) if kwargs.get(c) is None]
