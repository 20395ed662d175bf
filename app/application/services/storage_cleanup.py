"""Best-effort removal of physical file bytes after their records are gone.

schedule() starts a detached asyncio task and returns immediately. A failed
delete is logged and dropped; the record delete that triggered it has
already committed. No retries.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import TYPE_CHECKING

from app.domain.enums import StorageDriver
from app.shared.logging import get_logger

if TYPE_CHECKING:
    from app.application.interfaces.storage import IFileStorageService

logger = get_logger(__name__)


class StorageCleanup:
    """Detached physical deletes, tracked so shutdown (and tests) can wait for them."""

    def __init__(self, storage: "IFileStorageService | None" = None) -> None:
        self._storage = storage
        self._tasks: set[asyncio.Task[None]] = set()

    def _get_storage(self) -> "IFileStorageService":
        if self._storage is None:
            from app.infrastructure.external.storage import FileStorageService

            self._storage = FileStorageService()
        return self._storage

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(self, stored_path: str | None, storage_type: StorageDriver | None) -> None:
        """Queue deletion of stored bytes; never raises."""
        if storage_type == StorageDriver.DATABASE or not stored_path:
            return
        task = asyncio.get_running_loop().create_task(
            self._delete(stored_path, storage_type)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _delete(self, stored_path: str, storage_type: StorageDriver | None) -> None:
        try:
            await self._get_storage().delete(stored_path, storage_type)
        except Exception:
            logger.warning(
                "Physical cleanup failed for %s (%s); leaving it behind",
                stored_path,
                storage_type.value if storage_type else "unknown",
                exc_info=True,
            )

    async def drain(self) -> None:
        """Wait for every scheduled delete to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))


@lru_cache(maxsize=1)
def get_storage_cleanup() -> StorageCleanup:
    """Process-wide cleanup queue."""
    return StorageCleanup()
