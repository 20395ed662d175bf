"""Storage facade and cleanup queue dependencies (composition root)."""

from __future__ import annotations

from app.application.interfaces.storage import IFileStorageService
from app.application.services.storage_cleanup import StorageCleanup, get_storage_cleanup
from app.infrastructure.external.storage import FileStorageService


async def get_file_storage_service() -> IFileStorageService:
    """Build the storage facade; backends are created on first use."""
    return FileStorageService()


async def get_cleanup() -> StorageCleanup:
    """Process-wide post-commit cleanup queue."""
    return get_storage_cleanup()
