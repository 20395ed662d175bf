"""Application services: post-commit storage cleanup."""

from app.application.services.storage_cleanup import StorageCleanup, get_storage_cleanup

__all__ = [
    "StorageCleanup",
    "get_storage_cleanup",
]
