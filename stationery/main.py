"""Application factory.

Serve with ``uvicorn --factory stationery.main:create_app``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stationery.config import Settings, get_settings
from stationery.core.errors import (
    InsufficientStockError,
    NotFoundError,
    NotReadyError,
    StationeryError,
    StorageError,
    ValidationError,
)
from stationery.core.logging import setup_logging
from stationery.database.storage import Storage
from stationery.routers import (
    analytics_router,
    data_router,
    health_router,
    products_router,
    sales_router,
)

logger = logging.getLogger(__name__)

_ERROR_STATUS = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (InsufficientStockError, 409),
    (NotReadyError, 503),
    (StorageError, 503),
)


def _status_for(exc: StationeryError) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def stationery_error_handler(_request: Request, exc: StationeryError):
    body = {"error": str(exc)}
    body.update({key: value for key, value in exc.context().items() if value is not None})
    return JSONResponse(status_code=_status_for(exc), content=body)


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)
    storage = storage or Storage.from_settings(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("Starting %s (%s)", settings.APP_NAME, settings.ENVIRONMENT)
        result = storage.initialize()
        if result.ok:
            logger.info("Database initialization complete (%s)", storage.dialect)
        else:
            logger.error("Database initialization failed: %s", result.error)
        try:
            yield
        finally:
            storage.dispose()
            logger.info("Database connection pool closed")

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage
    app.add_exception_handler(StationeryError, stationery_error_handler)

    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(sales_router)
    app.include_router(analytics_router)
    app.include_router(data_router)
    return app


__all__ = ["create_app"]
