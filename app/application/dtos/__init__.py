"""Application DTOs (no ORM dependency)."""

from app.application.dtos.equipment import (
    EquipmentCreate,
    EquipmentDetail,
    EquipmentResult,
    EquipmentUpdate,
)
from app.application.dtos.file import (
    DEFAULT_MIME_TYPE,
    EquipmentFileCreate,
    EquipmentFileResult,
    StoredFileResult,
    StoredObject,
    UploadedContent,
)

__all__ = [
    "DEFAULT_MIME_TYPE",
    "EquipmentCreate",
    "EquipmentDetail",
    "EquipmentFileCreate",
    "EquipmentFileResult",
    "EquipmentResult",
    "EquipmentUpdate",
    "StoredFileResult",
    "StoredObject",
    "UploadedContent",
]
