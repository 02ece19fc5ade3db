r"""
Single import point for the ORM models.

Importing this package registers every table on Base.metadata, which is what
`create_tables()` and the test fixtures rely on:

    from app.models import Cat
"""

from .cat import Cat, CatBuilder

__all__ = [
    "Cat",
    "CatBuilder",
]
