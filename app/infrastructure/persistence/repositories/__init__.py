"""Repositories: SQLAlchemy implementations of the application repository ports."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.equipment_file_repo import (
    EquipmentFileRepository,
)
from app.infrastructure.persistence.repositories.equipment_repo import (
    EquipmentRepository,
)

__all__ = [
    "BaseRepository",
    "EquipmentFileRepository",
    "EquipmentRepository",
]
