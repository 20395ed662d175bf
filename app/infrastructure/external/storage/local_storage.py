"""Local filesystem storage, organised as <storage_root>/<owner_id>/<unique name>."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from pathlib import Path

import aiofiles
import aiofiles.os

from app.application.dtos.file import StoredFileResult, StoredObject
from app.domain.enums import StorageDriver
from app.infrastructure.exceptions import (
    StorageNotFoundError,
    StorageNotSupportedError,
    StoragePermissionError,
)
from app.shared.utils.datetime import from_timestamp_utc

logger = logging.getLogger(__name__)


class LocalStorageBackend:
    """Filesystem storage with owner-scoped directories.

    stored_path values are absolute paths. Deletes and reads accept any
    absolute path, since rows written under an earlier FILE_STORAGE_PATH
    must stay reachable.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    driver = StorageDriver.FILE_SYSTEM

    def __init__(self, storage_root: str) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files (created lazily on save).
        """
        self.storage_root = Path(storage_root).resolve()

    def _owner_dir(self, owner_id: str) -> Path:
        """Resolve <storage_root>/<owner_id>. Raises StoragePermissionError on traversal."""
        owner_dir = (self.storage_root / owner_id).resolve()
        if owner_dir == self.storage_root:
            raise StoragePermissionError(owner_id, "path_validation")
        try:
            owner_dir.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(owner_id, "path_validation") from e
        return owner_dir

    async def save(
        self,
        owner_id: str,
        content: bytes,
        mime_type: str,
        file_name: str,
        unique_name: str,
    ) -> StoredFileResult:
        target_dir = self._owner_dir(owner_id)
        # exist_ok covers concurrent creation; any other OSError propagates.
        await aiofiles.os.makedirs(target_dir, exist_ok=True)
        target_path = (target_dir / unique_name).resolve()
        if target_path.parent != target_dir:
            raise StoragePermissionError(unique_name, "path_validation")
        async with aiofiles.open(target_path, "wb") as f:
            await f.write(content)
        logger.info("Stored %d bytes at %s", len(content), target_path)
        return StoredFileResult(
            stored_path=str(target_path),
            file_name=file_name,
            size=len(content),
            mime_type=mime_type,
            storage_type=StorageDriver.FILE_SYSTEM,
        )

    async def delete(self, stored_path: str | None) -> None:
        """Remove the file if it exists; a missing file is not an error."""
        if not stored_path:
            return
        try:
            await aiofiles.os.stat(stored_path)
        except FileNotFoundError:
            return
        try:
            await aiofiles.os.remove(stored_path)
        except FileNotFoundError:
            # Removed concurrently between stat and remove.
            return
        logger.info("Deleted %s", stored_path)

    async def read(self, stored_path: str) -> StoredObject:
        try:
            stat = await aiofiles.os.stat(stored_path)
        except FileNotFoundError as e:
            raise StorageNotFoundError(stored_path) from e
        return StoredObject(
            body=self._iter_file(stored_path),
            content_length=stat.st_size,
            last_modified=from_timestamp_utc(stat.st_mtime),
        )

    async def _iter_file(self, stored_path: str) -> AsyncIterator[bytes]:
        async with aiofiles.open(stored_path, "rb") as f:
            while chunk := await f.read(self.CHUNK_SIZE):
                yield chunk

    async def get_signed_url(self, stored_path: str, expires_in_seconds: int) -> str:
        raise StorageNotSupportedError("get_signed_url", "filesystem")
