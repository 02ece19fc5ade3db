"""
Application factory.

Run with:
    uvicorn app.main:app --reload
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from app.api.v1.cats import router as cat_router
from app.api.v1.error_handlers import register_exception_handlers
from app.config import Settings, get_settings
from app.core.logging import RequestIDMiddleware, setup_logging
from app.database.session import create_tables, get_engine

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if settings.CREATE_TABLES_ON_STARTUP:
            await create_tables()
        logger.info("app.startup", extra={"env": settings.ENV})
        try:
            yield
        finally:
            await get_engine().dispose()
            logger.info("app.shutdown")

    app = FastAPI(title="Cat REST service", lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(cat_router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
