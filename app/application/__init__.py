"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, file storage).
"""

from app.application.interfaces import (
    IEquipmentFileRepository,
    IEquipmentRepository,
    IFileStorageService,
)
from app.application.services import StorageCleanup
from app.application.use_cases import EquipmentFileService, EquipmentService

__all__ = [
    "EquipmentFileService",
    "EquipmentService",
    "IEquipmentFileRepository",
    "IEquipmentRepository",
    "IFileStorageService",
    "StorageCleanup",
]
