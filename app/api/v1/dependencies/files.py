"""Equipment file dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.repositories import IEquipmentFileRepository
from app.application.interfaces.storage import IFileStorageService
from app.application.services.storage_cleanup import StorageCleanup
from app.application.use_cases.files import EquipmentFileService
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    EquipmentFileRepository,
    EquipmentRepository,
)

from .storage import get_cleanup, get_file_storage_service


async def get_equipment_file_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IEquipmentFileRepository:
    """Equipment file repository for read operations (file serving)."""
    return EquipmentFileRepository(db)


async def get_equipment_file_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    storage: Annotated[IFileStorageService, Depends(get_file_storage_service)],
    cleanup: Annotated[StorageCleanup, Depends(get_cleanup)],
) -> EquipmentFileService:
    """Build EquipmentFileService for upload/remove (one transaction per request)."""
    return EquipmentFileService(
        storage_service=storage,
        file_repo=EquipmentFileRepository(db),
        equipment_repo=EquipmentRepository(db),
        cleanup=cleanup,
    )
