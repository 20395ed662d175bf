"""Storage backend factory: builds the backend for a given driver from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.enums import StorageDriver
from app.infrastructure.external.storage.protocol import StorageBackendProtocol

if TYPE_CHECKING:
    from app.core.config import Settings


class StorageFactory:
    """Factory for storage backend instances based on configuration."""

    @staticmethod
    def create_backend(
        driver: StorageDriver, settings: "Settings | None" = None
    ) -> StorageBackendProtocol:
        """Create the backend for driver.

        Args:
            driver: Which backend to build.
            settings: Application settings; if None, uses get_settings().

        Returns:
            DatabaseStorageBackend, LocalStorageBackend or S3StorageBackend.

        Raises:
            StorageConfigurationError: OBJECT_STORAGE with incomplete credentials.
            ValueError: Unknown driver.
        """
        from app.core.config import get_settings

        s = settings or get_settings()

        if driver == StorageDriver.DATABASE:
            from app.infrastructure.external.storage.database_storage import (
                DatabaseStorageBackend,
            )

            return DatabaseStorageBackend()
        if driver == StorageDriver.FILE_SYSTEM:
            from app.infrastructure.external.storage.local_storage import (
                LocalStorageBackend,
            )

            return LocalStorageBackend(storage_root=s.file_storage_path)
        if driver == StorageDriver.OBJECT_STORAGE:
            from app.infrastructure.external.storage.object_storage import (
                ensure_object_storage_config,
            )
            from app.infrastructure.external.storage.s3_storage import (
                S3StorageBackend,
            )

            return S3StorageBackend(config=ensure_object_storage_config(s))
        raise ValueError(
            f"Unknown storage driver: {driver!r}. Supported: {', '.join(StorageDriver.values())}"
        )
