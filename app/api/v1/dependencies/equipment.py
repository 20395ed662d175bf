"""Equipment dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.storage import IFileStorageService
from app.application.services.storage_cleanup import StorageCleanup
from app.application.use_cases.equipment import EquipmentService
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    EquipmentFileRepository,
    EquipmentRepository,
)

from .storage import get_cleanup, get_file_storage_service


def _build_service(
    db: AsyncSession, storage: IFileStorageService, cleanup: StorageCleanup
) -> EquipmentService:
    return EquipmentService(
        storage_service=storage,
        equipment_repo=EquipmentRepository(db),
        file_repo=EquipmentFileRepository(db),
        cleanup=cleanup,
    )


async def get_equipment_query_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Annotated[IFileStorageService, Depends(get_file_storage_service)],
    cleanup: Annotated[StorageCleanup, Depends(get_cleanup)],
) -> EquipmentService:
    """EquipmentService on a read session (overview and detail)."""
    return _build_service(db, storage, cleanup)


async def get_equipment_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    storage: Annotated[IFileStorageService, Depends(get_file_storage_service)],
    cleanup: Annotated[StorageCleanup, Depends(get_cleanup)],
) -> EquipmentService:
    """EquipmentService on a transactional session (create/update/delete)."""
    return _build_service(db, storage, cleanup)
