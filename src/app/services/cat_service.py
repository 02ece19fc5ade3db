"""
Cat service: input validation in front of CatRepository, plus commit control.

Every query validates its arguments before the repository is touched, so a
non-positive `top` or an unknown field name never produces SQL.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions.base import InvalidValueError, NotFoundError
from app.models.cat import Cat
from app.repositories.cat_repository import CatRepository
from app.validators.field_validators import (
    CatField,
    column_for,
    validate_aggregatable_field,
    validate_field,
)

logger = logging.getLogger(__name__)

TOP_THREE = 3
# LIMIT is a signed 64-bit integer in both Postgres and SQLite
MAX_TOP = 2**63 - 1
NO_RECORDS_MESSAGE = "There are no records in data base"


class CatService:
    def __init__(self, db: AsyncSession, repository: CatRepository | None = None):
        self.db = db
        self.repository = repository or CatRepository(db)

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    async def create(self, cat: Cat) -> Cat:
        """Persist a new cat. Any id set on `cat` is discarded; the database assigns one."""
        created = await self.repository.create(name=cat.name, age=cat.age)
        await self.db.commit()
        logger.info("cat_service.create", extra={"id": created.id})
        return created

    async def find_by_id(self, cat_id: int) -> Cat | None:
        return await self.repository.get_by_id(cat_id)

    async def find_all(self) -> list[Cat]:
        return await self.repository.get_all()

    async def update_by_id(self, cat_id: int, cat: Cat) -> Cat:
        """
        Overwrite name and age of the cat stored under `cat_id`.

        Raises:
            InvalidValueError: "There is no cat with id = <id>" if it does not exist.
        """
        updated = await self.repository.update(cat_id, name=cat.name, age=cat.age)
        if updated is None:
            logger.info("cat_service.update.unknown_id", extra={"id": cat_id})
            raise InvalidValueError.no_cat_with_id(cat_id)

        await self.db.commit()
        logger.info("cat_service.update", extra={"id": cat_id})
        return updated

    async def delete_by_id(self, cat_id: int) -> None:
        """
        Raises:
            InvalidValueError: "There is no cat with id = <id>" if it does not exist.
        """
        deleted = await self.repository.delete(cat_id)
        if not deleted:
            logger.info("cat_service.delete.unknown_id", extra={"id": cat_id})
            raise InvalidValueError.no_cat_with_id(cat_id)

        await self.db.commit()
        logger.info("cat_service.delete", extra={"id": cat_id})

    # -------------------------------------------------------------------------
    # Field-driven queries
    # -------------------------------------------------------------------------

    async def find_top_by_field(self, top: int, field_name: str) -> list[Cat]:
        """
        The first `top` cats ordered ascending by `field_name`.

        `top` is checked before the field name, so (top=-2, fieldName="any")
        fails on "top".

        Raises:
            InvalidValueError: top <= 0, or larger than MAX_TOP
            NoSuchFieldError: unknown field name
        """
        if top is None or top <= 0 or top > MAX_TOP:
            raise InvalidValueError("top", top)
        field = validate_field(field_name)

        logger.debug("cat_service.find_top_by_field", extra={"top": top, "field": field.value})
        return await self.repository.find_top_by(column_for(field), top)

    async def find_top_three(self, field_name: str) -> list[Cat]:
        field = validate_field(field_name)
        return await self.repository.find_top_by(column_for(field), TOP_THREE)

    async def find_first_by_age(self) -> Cat:
        """
        The youngest cat.

        Raises:
            NotFoundError: the table is empty.
        """
        cat = await self.repository.find_first_by(column_for(CatField.AGE))
        if cat is None:
            raise NotFoundError(NO_RECORDS_MESSAGE)
        return cat

    async def find_total_by(self, field_name: str) -> int:
        """
        Sum of `field_name` over all cats (0 when there are none).

        Only numeric fields qualify: "name" raises NoSuchFieldError even though
        it is accepted by the top-N queries.
        """
        field = validate_aggregatable_field(field_name)
        return await self.repository.sum_of(column_for(field))
