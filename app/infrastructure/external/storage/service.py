"""File persistence facade: save / delete / read / sign, dispatched per driver.

Saves go to the process's active driver. Deletes and reads go to the driver
stamped on the file record, so changing FILE_STORAGE_DRIVER between deploys
never orphans files written under the previous driver.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from collections.abc import Callable
from typing import TYPE_CHECKING

from app.application.dtos.file import DEFAULT_MIME_TYPE, StoredFileResult, StoredObject
from app.domain.enums import StorageDriver
from app.infrastructure.external.storage.driver import get_active_driver
from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.protocol import StorageBackendProtocol

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_file_name(name: str) -> str:
    """Collapse each whitespace run to a single underscore. Idempotent."""
    return _WHITESPACE_RE.sub("_", name)


def generate_unique_name(file_name: str) -> str:
    """Physical name <epoch-millis>-<uuid4>-<file_name>; unique across concurrent uploads."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4()}-{file_name}"


class FileStorageService:
    """Facade over the database, filesystem and object storage backends.

    Backends are built lazily, so object storage credentials are only
    required once an operation actually needs them.
    """

    def __init__(
        self,
        settings: "Settings | None" = None,
        *,
        driver_resolver: Callable[[], StorageDriver] = get_active_driver,
        backends: dict[StorageDriver, StorageBackendProtocol] | None = None,
    ) -> None:
        self._settings = settings
        self._driver_resolver = driver_resolver
        self._backends: dict[StorageDriver, StorageBackendProtocol] = dict(backends or {})

    @property
    def active_driver(self) -> StorageDriver:
        return self._driver_resolver()

    def _backend(self, driver: StorageDriver) -> StorageBackendProtocol:
        backend = self._backends.get(driver)
        if backend is None:
            backend = StorageFactory.create_backend(driver, self._settings)
            self._backends[driver] = backend
        return backend

    def _signed_url_expiry(self) -> int:
        from app.core.config import get_settings

        return (self._settings or get_settings()).file_signed_url_expires_seconds

    async def save(
        self,
        owner_id: str,
        content: bytes,
        mime_type: str | None,
        original_name: str,
        explicit_name: str | None = None,
    ) -> StoredFileResult:
        """Store content for owner_id under the active driver.

        Args:
            owner_id: Equipment id; namespaces the physical location.
            content: File bytes.
            mime_type: Content type hint; empty means application/octet-stream.
            original_name: Client-supplied file name.
            explicit_name: Preferred display name (e.g. the upload label).

        Returns:
            StoredFileResult stamped with the driver that stored it.

        Raises:
            StorageConfigurationError: Object storage selected without full credentials.
        """
        file_name = sanitize_file_name(explicit_name or original_name)
        unique_name = generate_unique_name(file_name)
        driver = self.active_driver
        result = await self._backend(driver).save(
            owner_id=owner_id,
            content=content,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            file_name=file_name,
            unique_name=unique_name,
        )
        logger.info(
            "Saved file %s for %s (%d bytes, driver=%s)",
            file_name,
            owner_id,
            result.size,
            driver.value,
        )
        return result

    async def delete(
        self,
        stored_path: str | None,
        storage_type: StorageDriver | None = None,
    ) -> None:
        """Remove the physical bytes of a stored file.

        storage_type is the driver stamped on the record; the active driver is
        used only for records that predate stamping.
        """
        driver = storage_type or self.active_driver
        if driver == StorageDriver.DATABASE or not stored_path:
            return
        await self._backend(driver).delete(stored_path)

    async def read(
        self,
        stored_path: str,
        storage_type: StorageDriver | None = None,
    ) -> StoredObject:
        """Open stored bytes for streaming from the record's backend."""
        driver = storage_type or self.active_driver
        return await self._backend(driver).read(stored_path)

    async def get_signed_url(
        self,
        stored_path: str,
        expires_in_seconds: int | None = None,
    ) -> str:
        """Return a time-limited object storage URL (default FILE_SIGNED_URL_EXPIRES_SECONDS).

        Raises:
            StorageConfigurationError: Object storage credentials incomplete.
            StorageSigningError: Key could not be derived or signing failed.
        """
        expires = expires_in_seconds or self._signed_url_expiry()
        return await self._backend(StorageDriver.OBJECT_STORAGE).get_signed_url(
            stored_path, expires
        )
