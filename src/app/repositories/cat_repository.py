"""
Cat repository: the ordered and aggregate queries behind the field-driven endpoints.

Every method takes a column attribute that has already been validated by
app.validators.field_validators. Raw field-name strings never reach this layer.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
import logging

from app.exceptions.mapper import db_error_handler
from app.models.cat import Cat
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class CatRepository(BaseRepository[Cat]):
    """
    Repository for Cat entity operations.

    Inherits create/get_by_id/get_all/update/delete from BaseRepository.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Cat, db)

    async def find_top_by(self, column: InstrumentedAttribute, limit: int) -> list[Cat]:
        """
        Return up to `limit` cats ordered ascending by `column`.

        Ties are broken by id, so equal values come back in insertion order.
        """
        query = (
            select(Cat)
            .order_by(column.asc(), Cat.id.asc())
            .limit(limit)
        )
        async with db_error_handler(self.db, "Cat"):
            result = await self.db.execute(query)
            cats = list(result.scalars().all())

        logger.debug(
            "repo.cat.find_top_by",
            extra={"column": column.key, "limit": limit, "returned": len(cats)},
        )
        return cats

    async def find_first_by(self, column: InstrumentedAttribute) -> Cat | None:
        """
        Return the cat with the smallest value of `column`, or None on an empty table.
        """
        cats = await self.find_top_by(column, 1)
        return cats[0] if cats else None

    async def sum_of(self, column: InstrumentedAttribute) -> int:
        """
        SUM(column) over all cats; 0 when the table is empty.
        """
        # SUM over zero rows is NULL in SQL, hence the COALESCE
        query = select(func.coalesce(func.sum(column), 0))
        async with db_error_handler(self.db, "Cat"):
            result = await self.db.execute(query)
            total = int(result.scalar_one())

        logger.debug("repo.cat.sum_of", extra={"column": column.key, "total": total})
        return total
