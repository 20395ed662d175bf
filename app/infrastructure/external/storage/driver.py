"""Storage driver resolution: which backend new uploads go to.

Order (first match wins): explicit FILE_STORAGE_DRIVER, complete object
storage credentials, hosting platform marker (DATABASE), FILE_SYSTEM.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.domain.enums import StorageDriver
from app.infrastructure.external.storage.object_storage import (
    read_object_storage_config,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Accepted spellings for FILE_STORAGE_DRIVER (upper-cased before lookup).
DRIVER_ALIASES: dict[str, StorageDriver] = {
    "DATABASE": StorageDriver.DATABASE,
    "FILESYSTEM": StorageDriver.FILE_SYSTEM,
    "FILE_SYSTEM": StorageDriver.FILE_SYSTEM,
    "OBJECT_STORAGE": StorageDriver.OBJECT_STORAGE,
    "BUCKET": StorageDriver.OBJECT_STORAGE,
    "S3": StorageDriver.OBJECT_STORAGE,
}


def normalize_driver(value: str | None) -> StorageDriver | None:
    """Map a configured driver name to a StorageDriver, or None if unrecognised."""
    if not value:
        return None
    return DRIVER_ALIASES.get(value.strip().upper())


def resolve_driver(settings: "Settings") -> StorageDriver:
    """Pick the storage driver from configuration. Pure; no I/O."""
    configured = normalize_driver(settings.file_storage_driver)
    if configured is not None:
        return configured
    if settings.file_storage_driver:
        logger.warning(
            "Ignoring unknown FILE_STORAGE_DRIVER=%r (accepted: %s)",
            settings.file_storage_driver,
            ", ".join(sorted(DRIVER_ALIASES)),
        )
    if read_object_storage_config(settings) is not None:
        return StorageDriver.OBJECT_STORAGE
    if settings.has_platform_marker:
        return StorageDriver.DATABASE
    return StorageDriver.FILE_SYSTEM


@lru_cache(maxsize=1)
def get_active_driver() -> StorageDriver:
    """Return the process-wide driver for new uploads (resolved on first call).

    Concurrent first calls may both resolve; the result is deterministic so
    either value is fine. Tests call get_active_driver.cache_clear().
    """
    from app.core.config import get_settings

    driver = resolve_driver(get_settings())
    logger.info("File storage driver: %s", driver.value)
    return driver
