"""Equipment file operations: upload (write) and removal with post-commit cleanup."""

from __future__ import annotations

import logging

from app.application.dtos.file import EquipmentFileCreate, EquipmentFileResult
from app.application.interfaces.repositories import (
    IEquipmentFileRepository,
    IEquipmentRepository,
)
from app.application.interfaces.storage import IFileStorageService
from app.application.services.storage_cleanup import StorageCleanup
from app.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)


class EquipmentFileService:
    """Store uploaded bytes, record them, and remove records plus their bytes."""

    def __init__(
        self,
        storage_service: IFileStorageService,
        file_repo: IEquipmentFileRepository,
        equipment_repo: IEquipmentRepository,
        cleanup: StorageCleanup,
    ) -> None:
        self.storage = storage_service
        self.file_repo = file_repo
        self.equipment_repo = equipment_repo
        self.cleanup = cleanup

    async def upload_equipment_file(
        self,
        equipment_id: str,
        label: str,
        content: bytes,
        mime_type: str | None,
        original_name: str,
        description: str | None = None,
        uploaded_by: str | None = None,
    ) -> EquipmentFileResult:
        """Save bytes under the active driver and create the file record."""
        label = label.strip()
        if not label:
            raise ValidationException("El nombre del archivo es obligatorio", field="label")
        if not await self.equipment_repo.get_by_id(equipment_id):
            raise ResourceNotFoundException("equipment", equipment_id)

        stored = await self.storage.save(
            equipment_id, content, mime_type, original_name, explicit_name=label
        )
        try:
            created = await self.file_repo.create_file(
                EquipmentFileCreate(
                    equipment_id=equipment_id,
                    label=label,
                    description=description,
                    uploaded_by=uploaded_by,
                    stored=stored,
                )
            )
        except Exception:
            # No record points at the bytes; remove them.
            self.cleanup.schedule(stored.stored_path, stored.storage_type)
            raise
        logger.info(
            "Uploaded file %s for equipment %s (%s, %d bytes)",
            created.id,
            equipment_id,
            stored.storage_type.value,
            stored.size,
        )
        return created

    async def remove_equipment_file(self, file_id: str) -> EquipmentFileResult:
        """Delete the record; its bytes are removed once the transaction commits."""
        deleted = await self.file_repo.delete_by_id(file_id)
        if deleted is None:
            raise ResourceNotFoundException("equipment_file", file_id)
        self.file_repo.after_commit(
            lambda: self.cleanup.schedule(deleted.stored_path, deleted.storage_type)
        )
        logger.info(
            "Removed file record %s (%s)", deleted.id, deleted.storage_type.value
        )
        return deleted
