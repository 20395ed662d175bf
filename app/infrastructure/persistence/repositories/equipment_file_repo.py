"""Equipment file repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from app.application.dtos.file import EquipmentFileCreate, EquipmentFileResult
from app.infrastructure.persistence.models.equipment_file import EquipmentFile
from app.infrastructure.persistence.repositories.base import BaseRepository


def file_to_result(
    f: EquipmentFile, *, include_data: bool = False
) -> EquipmentFileResult:
    """Map ORM EquipmentFile to EquipmentFileResult (data only when it was loaded)."""
    return EquipmentFileResult(
        id=f.id,
        equipment_id=f.equipment_id,
        label=f.label,
        description=f.description,
        uploaded_by=f.uploaded_by,
        file_name=f.file_name,
        size=f.size,
        mime_type=f.mime_type,
        stored_path=f.stored_path,
        storage_type=f.storage_type,
        is_primary=f.is_primary,
        uploaded_at=f.uploaded_at,
        data=f.data if include_data else None,
    )


def _create_to_file(d: EquipmentFileCreate) -> EquipmentFile:
    """Map EquipmentFileCreate (write-model) to ORM EquipmentFile."""
    stored = d.stored
    return EquipmentFile(
        equipment_id=d.equipment_id,
        label=d.label,
        description=d.description,
        uploaded_by=d.uploaded_by,
        file_name=stored.file_name,
        size=stored.size,
        mime_type=stored.mime_type,
        stored_path=stored.stored_path,
        storage_type=stored.storage_type,
        data=stored.data,
        is_primary=d.is_primary,
    )


class EquipmentFileRepository(BaseRepository[EquipmentFile]):
    """Equipment file repository. The data column is deferred and loaded only on request."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EquipmentFile)

    async def get_by_id(
        self, file_id: str, *, include_data: bool = False
    ) -> EquipmentFileResult | None:
        options = (undefer(EquipmentFile.data),) if include_data else ()
        row = await self.get_model(file_id, *options)
        return file_to_result(row, include_data=include_data) if row else None

    async def list_by_equipment(self, equipment_id: str) -> list[EquipmentFileResult]:
        result = await self.db.execute(
            select(EquipmentFile)
            .where(EquipmentFile.equipment_id == equipment_id)
            .order_by(EquipmentFile.uploaded_at.desc(), EquipmentFile.id.desc())
        )
        return [file_to_result(f) for f in result.scalars().all()]

    async def create_file(self, data: EquipmentFileCreate) -> EquipmentFileResult:
        created = await self.create(_create_to_file(data))
        return file_to_result(created)

    async def delete_by_id(self, file_id: str) -> EquipmentFileResult | None:
        row = await self.get_model(file_id)
        if row is None:
            return None
        deleted = file_to_result(row)
        await self.delete(row)
        return deleted
