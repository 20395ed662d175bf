"""Equipment repository. Returns application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.application.dtos.equipment import (
    EquipmentCreate,
    EquipmentDetail,
    EquipmentResult,
    EquipmentUpdate,
)
from app.application.dtos.file import EquipmentFileResult
from app.domain.exceptions import ResourceConflictException, ResourceNotFoundException
from app.infrastructure.persistence.models.equipment import Equipment
from app.infrastructure.persistence.models.equipment_file import EquipmentFile
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.equipment_file_repo import (
    EquipmentFileRepository,
    file_to_result,
)


def _equipment_to_result(e: Equipment) -> EquipmentResult:
    """Map ORM Equipment (primary_photo eagerly loaded) to EquipmentResult."""
    photo = e.primary_photo
    return EquipmentResult(
        id=e.id,
        name=e.name,
        code=e.code,
        category=e.category,
        description=e.description,
        notes=e.notes,
        position=e.position,
        primary_photo_id=e.primary_photo_id,
        created_at=e.created_at,
        updated_at=e.updated_at,
        primary_photo=file_to_result(photo) if photo is not None else None,
    )


class EquipmentRepository(BaseRepository[Equipment]):
    """Equipment repository. Unique code violations raise ResourceConflictException."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Equipment)

    def _select(self) -> Any:
        return (
            select(Equipment)
            .options(selectinload(Equipment.primary_photo))
            .execution_options(populate_existing=True)
        )

    async def get_by_id(self, equipment_id: str) -> EquipmentResult | None:
        result = await self.db.execute(self._select().where(Equipment.id == equipment_id))
        row = result.scalar_one_or_none()
        return _equipment_to_result(row) if row else None

    async def get_by_code(self, code: str) -> EquipmentResult | None:
        result = await self.db.execute(self._select().where(Equipment.code == code))
        row = result.scalar_one_or_none()
        return _equipment_to_result(row) if row else None

    async def list_overview(self) -> list[EquipmentResult]:
        result = await self.db.execute(
            self._select().order_by(Equipment.category.asc(), Equipment.name.asc())
        )
        return [_equipment_to_result(e) for e in result.scalars().all()]

    async def get_detail(self, equipment_id: str) -> EquipmentDetail | None:
        equipment = await self.get_by_id(equipment_id)
        if equipment is None:
            return None
        files = await EquipmentFileRepository(self.db).list_by_equipment(equipment_id)
        return EquipmentDetail(equipment=equipment, files=files)

    async def _ensure_code_available(self, code: str, exclude_id: str | None = None) -> None:
        existing = await self.get_by_code(code)
        if existing is not None and existing.id != exclude_id:
            raise ResourceConflictException("equipment", "code", code)

    async def create_equipment(self, data: EquipmentCreate) -> EquipmentResult:
        await self._ensure_code_available(data.code)
        obj = Equipment(
            name=data.name,
            code=data.code,
            category=data.category,
            description=data.description,
            notes=data.notes,
            position=data.position,
        )
        try:
            created = await self.create(obj)
        except IntegrityError as e:
            raise ResourceConflictException("equipment", "code", data.code) from e
        result = await self.get_by_id(created.id)
        if result is None:
            raise ResourceNotFoundException("equipment", created.id)
        return result

    async def update_equipment(
        self,
        equipment_id: str,
        data: EquipmentUpdate,
        *,
        primary_photo_id: str | None = None,
    ) -> EquipmentResult:
        obj = await self.get_model(equipment_id)
        if obj is None:
            raise ResourceNotFoundException("equipment", equipment_id)
        changes = data.changes()
        if "code" in changes and changes["code"] != obj.code:
            await self._ensure_code_available(changes["code"], exclude_id=equipment_id)
        for key, value in changes.items():
            setattr(obj, key, value)
        if primary_photo_id is not None:
            obj.primary_photo_id = primary_photo_id
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise ResourceConflictException(
                "equipment", "code", str(changes.get("code", obj.code))
            ) from e
        result = await self.get_by_id(equipment_id)
        if result is None:
            raise ResourceNotFoundException("equipment", equipment_id)
        return result

    async def delete_equipment(self, equipment_id: str) -> list[EquipmentFileResult]:
        """Delete equipment and its file rows in this transaction; return the file rows."""
        obj = await self.get_model(equipment_id)
        if obj is None:
            raise ResourceNotFoundException("equipment", equipment_id)
        files = await self.db.execute(
            select(EquipmentFile).where(EquipmentFile.equipment_id == equipment_id)
        )
        deleted = [file_to_result(f) for f in files.scalars().all()]
        # Break the equipment -> primary photo reference before removing files.
        await self.db.execute(
            update(Equipment)
            .where(Equipment.id == equipment_id)
            .values(primary_photo_id=None)
        )
        await self.db.execute(
            delete(EquipmentFile).where(EquipmentFile.equipment_id == equipment_id)
        )
        await self.db.execute(delete(Equipment).where(Equipment.id == equipment_id))
        return deleted
