"""File storage port used by use cases and the file endpoint."""

from typing import Protocol

from app.application.dtos.file import StoredFileResult, StoredObject
from app.domain.enums import StorageDriver


class IFileStorageService(Protocol):
    """Protocol for the file persistence facade (DIP)."""

    async def save(
        self,
        owner_id: str,
        content: bytes,
        mime_type: str | None,
        original_name: str,
        explicit_name: str | None = None,
    ) -> StoredFileResult:
        """Store bytes under the active driver and return where they went."""
        ...

    async def delete(
        self,
        stored_path: str | None,
        storage_type: StorageDriver | None = None,
    ) -> None:
        """Remove stored bytes using the driver stamped on the record."""
        ...

    async def read(
        self,
        stored_path: str,
        storage_type: StorageDriver | None = None,
    ) -> StoredObject:
        """Open stored bytes for streaming."""
        ...

    async def get_signed_url(
        self,
        stored_path: str,
        expires_in_seconds: int | None = None,
    ) -> str:
        """Return a time-limited object storage URL."""
        ...
