"""
Generic CRUD repository.

CatRepository (and any later model repository) subclasses BaseRepository to
get create/read/update/delete and adds its own queries on top.

Repositories only `flush()`. Committing is the service's decision, so one
service call is one unit of work.
"""

import logging
import time
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.base import Base
from app.exceptions.base import InvalidFieldError, RepositoryError
from app.exceptions.mapper import db_error_handler
from app.validators.exception_validators import find_missing_required, find_unknown_model_kwargs

ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    CRUD over one mapped model class with an integer `id` primary key.

    Type Parameters:
        ModelType: the SQLAlchemy model class managed by the repository.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: the model class itself (Cat, not Cat()).
            db: the request's AsyncSession.
        """
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def _reject_unknown_keys(self, operation: str, values: dict) -> None:
        unknown = find_unknown_model_kwargs(self.model, values)
        if unknown:
            logger.info(
                f"repo.{operation}.invalid_fields",
                extra={"model": self.model_name, "invalid_fields": unknown},
            )
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

    # -----------------------------------------------------------------------------------------------------------------
    # Create
    # -----------------------------------------------------------------------------------------------------------------

    async def create(self, **kwargs) -> ModelType:
        """
        Insert a row built from `kwargs` and return it with its id and server defaults loaded.

        Raises:
            InvalidFieldError: a key is not a mapped attribute.
            RepositoryError: a required column is missing, or the database rejected the row.
        """
        logger.debug("repo.create.start", extra={"model": self.model_name, "provided_keys": sorted(kwargs)})

        self._reject_unknown_keys("create", kwargs)
        missing = find_missing_required(self.model, kwargs)
        if missing:
            logger.info("repo.create.missing_required", extra={"model": self.model_name, "missing_fields": missing})
            raise RepositoryError(f"Missing required field(s): {', '.join(missing)} for {self.model_name}", fields=missing)

        started = time.perf_counter()
        entity = self.model(**kwargs)
        async with db_error_handler(self.db, self.model_name):
            self.db.add(entity)
            # the INSERT assigns the id; refresh picks up created_on/updated_on
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "id": entity.id,
                "duration_ms": int((time.perf_counter() - started) * 1000),
            },
        )
        return entity

    # -----------------------------------------------------------------------------------------------------------------
    # Read
    # -----------------------------------------------------------------------------------------------------------------

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        statement = select(self.model).where(self.model.id == entity_id)
        async with db_error_handler(self.db, self.model_name):
            entity = (await self.db.execute(statement)).scalar_one_or_none()

        logger.debug("repo.get_by_id", extra={"model": self.model_name, "id": entity_id, "found": entity is not None})
        return entity

    async def get_all(self, offset: int = 0, limit: int | None = None) -> list[ModelType]:
        """Rows in id (insertion) order; `limit=None` means no limit."""
        statement = select(self.model).order_by(self.model.id.asc()).offset(offset)
        if limit is not None:
            statement = statement.limit(limit)

        async with db_error_handler(self.db, self.model_name):
            entities = list((await self.db.execute(statement)).scalars().all())

        logger.debug("repo.get_all", extra={"model": self.model_name, "returned": len(entities)})
        return entities

    # -----------------------------------------------------------------------------------------------------------------
    # Update
    # -----------------------------------------------------------------------------------------------------------------

    async def update(self, entity_id: int, **kwargs: Any) -> ModelType | None:
        """
        Assign `kwargs` onto the loaded entity and flush. None values are skipped.

        Returns:
            The updated entity, or None when no row has `entity_id`.
        """
        self._reject_unknown_keys("update", kwargs)

        entity = await self.get_by_id(entity_id)
        if entity is None:
            logger.info("repo.update.not_found", extra={"model": self.model_name, "id": entity_id})
            return None

        changes = {key: value for key, value in kwargs.items() if value is not None}
        async with db_error_handler(self.db, self.model_name):
            for key, value in changes.items():
                setattr(entity, key, value)
            await self.db.flush()
            # updated_on is set by the database
            await self.db.refresh(entity)

        logger.debug("repo.update.success", extra={"model": self.model_name, "id": entity_id, "updated_keys": sorted(changes)})
        return entity

    # -----------------------------------------------------------------------------------------------------------------
    # Delete
    # -----------------------------------------------------------------------------------------------------------------

    async def delete(self, entity_id: int) -> bool:
        """
        Returns:
            True if a row was deleted, False if there was none.
        """
        statement = delete(self.model).where(self.model.id == entity_id)
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(statement)

        deleted = result.rowcount > 0
        logger.info("repo.delete", extra={"model": self.model_name, "id": entity_id, "deleted": deleted})
        return deleted
