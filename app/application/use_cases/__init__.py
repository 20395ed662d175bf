"""Application use cases: one entry point per workflow."""

from app.application.use_cases.equipment import EquipmentService
from app.application.use_cases.files import EquipmentFileService

__all__ = [
    "EquipmentFileService",
    "EquipmentService",
]
