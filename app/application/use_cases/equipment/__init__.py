"""Equipment use cases."""

from app.application.use_cases.equipment.equipment_operations import EquipmentService

__all__ = ["EquipmentService"]
