"""
Repository layer.

The repository pattern keeps SQLAlchemy queries out of the service and API
layers:

    from app.repositories import CatRepository
"""

from .base_repository import BaseRepository
from .cat_repository import CatRepository

__all__ = [
    "BaseRepository",
    "CatRepository",
]
