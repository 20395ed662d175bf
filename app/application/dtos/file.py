"""DTOs for stored files and equipment file records (no dependency on ORM)."""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import StorageDriver

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class StoredFileResult:
    """Outcome of saving bytes through the storage facade.

    stored_path is an absolute filesystem path, a full object storage URL,
    or None when the bytes travel inline in ``data`` (database driver).
    """

    stored_path: str | None
    file_name: str
    size: int
    mime_type: str
    storage_type: StorageDriver
    data: bytes | None = None


@dataclass
class StoredObject:
    """Bytes plus upstream metadata returned by a storage read."""

    body: AsyncIterator[bytes]
    content_type: str | None = None
    content_length: int | None = None
    etag: str | None = None
    last_modified: datetime | None = None


@dataclass(frozen=True)
class EquipmentFileCreate:
    """Input for creating an equipment file record (write-model)."""

    equipment_id: str
    label: str
    description: str | None
    uploaded_by: str | None
    stored: StoredFileResult
    is_primary: bool = False


@dataclass(frozen=True)
class EquipmentFileResult:
    """Equipment file read-model. ``data`` is only loaded for database-stored files."""

    id: str
    equipment_id: str
    label: str
    description: str | None
    uploaded_by: str | None
    file_name: str
    size: int
    mime_type: str | None
    stored_path: str | None
    storage_type: StorageDriver
    is_primary: bool
    uploaded_at: datetime | None
    data: bytes | None = None


@dataclass(frozen=True)
class UploadedContent:
    """Raw upload as received from a multipart form."""

    content: bytes
    file_name: str
    mime_type: str | None = None

    @property
    def is_empty(self) -> bool:
        return len(self.content) == 0
