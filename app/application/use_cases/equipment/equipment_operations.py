"""Equipment operations: create/update with primary photo, delete, and queries."""

from __future__ import annotations

import logging

from app.application.dtos.equipment import (
    EquipmentCreate,
    EquipmentDetail,
    EquipmentResult,
    EquipmentUpdate,
)
from app.application.dtos.file import (
    EquipmentFileCreate,
    EquipmentFileResult,
    UploadedContent,
)
from app.application.interfaces.repositories import (
    IEquipmentFileRepository,
    IEquipmentRepository,
)
from app.application.interfaces.storage import IFileStorageService
from app.application.services.storage_cleanup import StorageCleanup
from app.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)

PRIMARY_PHOTO_LABEL = "Foto principal"
PRIMARY_PHOTO_DESCRIPTION = "Imagen de referencia del equipo"
PRIMARY_PHOTO_UPLOADER = "Sistema"

_REQUIRED_MESSAGES = {
    "name": "El nombre es obligatorio",
    "code": "El código interno es obligatorio",
    "category": "La categoría es obligatoria",
}


def _require(field: str, value: str | None) -> None:
    if value is not None and not value.strip():
        raise ValidationException(_REQUIRED_MESSAGES[field], field=field)


class EquipmentService:
    """Equipment lifecycle. Physical deletes are deferred until the transaction commits."""

    def __init__(
        self,
        storage_service: IFileStorageService,
        equipment_repo: IEquipmentRepository,
        file_repo: IEquipmentFileRepository,
        cleanup: StorageCleanup,
    ) -> None:
        self.storage = storage_service
        self.equipment_repo = equipment_repo
        self.file_repo = file_repo
        self.cleanup = cleanup

    def _cleanup_after_commit(self, files: list[EquipmentFileResult]) -> None:
        for f in files:
            self.equipment_repo.after_commit(
                lambda f=f: self.cleanup.schedule(f.stored_path, f.storage_type)
            )

    async def _store_primary_photo(
        self, equipment_id: str, photo: UploadedContent, explicit_name: str
    ) -> EquipmentFileResult:
        stored = await self.storage.save(
            equipment_id,
            photo.content,
            photo.mime_type,
            photo.file_name,
            explicit_name=explicit_name,
        )
        try:
            return await self.file_repo.create_file(
                EquipmentFileCreate(
                    equipment_id=equipment_id,
                    label=PRIMARY_PHOTO_LABEL,
                    description=PRIMARY_PHOTO_DESCRIPTION,
                    uploaded_by=PRIMARY_PHOTO_UPLOADER,
                    stored=stored,
                    is_primary=True,
                )
            )
        except Exception:
            self.cleanup.schedule(stored.stored_path, stored.storage_type)
            raise

    async def _set_primary_photo(
        self, equipment_id: str, data: EquipmentUpdate, record: EquipmentFileResult
    ) -> EquipmentResult:
        try:
            return await self.equipment_repo.update_equipment(
                equipment_id, data, primary_photo_id=record.id
            )
        except Exception:
            # The photo row rolls back with the transaction; its bytes would not.
            self.cleanup.schedule(record.stored_path, record.storage_type)
            raise

    async def list_overview(self) -> list[EquipmentResult]:
        return await self.equipment_repo.list_overview()

    async def get_detail(self, equipment_id: str) -> EquipmentDetail:
        detail = await self.equipment_repo.get_detail(equipment_id)
        if detail is None:
            raise ResourceNotFoundException("equipment", equipment_id)
        return detail

    async def create_equipment(
        self, data: EquipmentCreate, photo: UploadedContent | None = None
    ) -> EquipmentResult:
        """Create equipment; a non-empty photo becomes its primary photo."""
        for field in ("name", "code", "category"):
            _require(field, getattr(data, field) or "")
        equipment = await self.equipment_repo.create_equipment(data)
        if photo is None or photo.is_empty:
            return equipment

        record = await self._store_primary_photo(
            equipment.id, photo, f"{equipment.code}-foto-principal"
        )
        return await self._set_primary_photo(equipment.id, EquipmentUpdate(), record)

    async def update_equipment(
        self,
        equipment_id: str,
        data: EquipmentUpdate,
        photo: UploadedContent | None = None,
    ) -> EquipmentResult:
        """Apply a partial update; a non-empty photo replaces the primary photo."""
        for field in ("name", "code", "category"):
            _require(field, getattr(data, field))
        existing = await self.equipment_repo.get_by_id(equipment_id)
        if existing is None:
            raise ResourceNotFoundException("equipment", equipment_id)
        if photo is None or photo.is_empty:
            return await self.equipment_repo.update_equipment(equipment_id, data)

        code = data.code or existing.code
        record = await self._store_primary_photo(equipment_id, photo, f"{code}-foto")
        updated = await self._set_primary_photo(equipment_id, data, record)
        if existing.primary_photo_id:
            old = await self.file_repo.delete_by_id(existing.primary_photo_id)
            if old is not None:
                self._cleanup_after_commit([old])
        return updated

    async def delete_equipment(self, equipment_id: str) -> None:
        """Delete equipment and its file records; bytes are removed after commit."""
        files = await self.equipment_repo.delete_equipment(equipment_id)
        self._cleanup_after_commit(files)
        logger.info(
            "Deleted equipment %s with %d file(s)", equipment_id, len(files)
        )
