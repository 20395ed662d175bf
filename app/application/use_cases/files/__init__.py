"""Equipment file use cases."""

from app.application.use_cases.files.equipment_file_operations import (
    EquipmentFileService,
)

__all__ = ["EquipmentFileService"]
