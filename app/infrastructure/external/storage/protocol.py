"""Storage backend protocol (DIP). Implementations: DatabaseStorageBackend, LocalStorageBackend, S3StorageBackend."""

from typing import Protocol

from app.application.dtos.file import StoredFileResult, StoredObject
from app.domain.enums import StorageDriver


class StorageBackendProtocol(Protocol):
    """Protocol for one physical home of file bytes."""

    driver: StorageDriver

    async def save(
        self,
        owner_id: str,
        content: bytes,
        mime_type: str,
        file_name: str,
        unique_name: str,
    ) -> StoredFileResult:
        """Persist content for owner_id. file_name is already sanitized; unique_name is collision-free."""
        ...

    async def delete(self, stored_path: str | None) -> None:
        """Remove the stored bytes. Missing objects are not an error."""
        ...

    async def read(self, stored_path: str) -> StoredObject:
        """Open the stored bytes for streaming."""
        ...

    async def get_signed_url(self, stored_path: str, expires_in_seconds: int) -> str:
        """Return a time-limited URL granting read access."""
        ...
