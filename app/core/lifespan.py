"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, storage
driver, pending file cleanup, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.storage_cleanup import get_storage_cleanup
from app.infrastructure.external.storage import get_active_driver
from app.shared.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, then resolve and log the storage driver once.
    Shutdown: wait for scheduled file deletes, then dispose the SQL engine.
    """
    setup_logging()
    driver = get_active_driver()
    app.state.storage_driver = driver

    yield

    cleanup = get_storage_cleanup()
    if cleanup.pending:
        logger.info("Waiting for %d pending file cleanup task(s)", cleanup.pending)
        await cleanup.drain()

    from app.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
