"""Database-blob storage: bytes travel with the file record, nothing is written elsewhere."""

from __future__ import annotations

from app.application.dtos.file import StoredFileResult, StoredObject
from app.domain.enums import StorageDriver
from app.infrastructure.exceptions import StorageNotSupportedError


class DatabaseStorageBackend:
    """Inline storage for hosts without durable disk.

    save() hands the bytes back in StoredFileResult.data for the caller to
    persist on the row; deleting the row deletes the bytes.
    """

    driver = StorageDriver.DATABASE

    async def save(
        self,
        owner_id: str,
        content: bytes,
        mime_type: str,
        file_name: str,
        unique_name: str,
    ) -> StoredFileResult:
        return StoredFileResult(
            stored_path=None,
            file_name=file_name,
            size=len(content),
            mime_type=mime_type,
            storage_type=StorageDriver.DATABASE,
            data=content,
        )

    async def delete(self, stored_path: str | None) -> None:
        """No-op: the blob is removed with its database row."""

    async def read(self, stored_path: str) -> StoredObject:
        raise StorageNotSupportedError("read", "database")

    async def get_signed_url(self, stored_path: str, expires_in_seconds: int) -> str:
        raise StorageNotSupportedError("get_signed_url", "database")
