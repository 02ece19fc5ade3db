from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.session import get_async_session
from app.services.cat_service import CatService


def get_cat_service(db: AsyncSession = Depends(get_async_session)) -> CatService:
    # One service (and repository) per request, bound to the request's session
    return CatService(db)
