"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.equipment import Equipment
from app.infrastructure.persistence.models.equipment_file import EquipmentFile
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    DashboardModel,
    TimestampMixin,
)

__all__ = [
    "Equipment",
    "EquipmentFile",
    "CuidMixin",
    "DashboardModel",
    "TimestampMixin",
]
