"""Repository protocols (ports) for equipment and equipment files.

Application use cases depend on these; infrastructure repositories implement
them. Methods return application DTOs, never ORM objects.
"""

from collections.abc import Callable
from typing import Protocol

from app.application.dtos.equipment import (
    EquipmentCreate,
    EquipmentDetail,
    EquipmentResult,
    EquipmentUpdate,
)
from app.application.dtos.file import EquipmentFileCreate, EquipmentFileResult


class IEquipmentFileRepository(Protocol):
    """Protocol for equipment file repository (DIP)."""

    async def get_by_id(
        self, file_id: str, *, include_data: bool = False
    ) -> EquipmentFileResult | None:
        """Return file record by ID; inline bytes only when include_data is True."""

    async def list_by_equipment(self, equipment_id: str) -> list[EquipmentFileResult]:
        """Return files of an equipment, newest first (without inline bytes)."""

    async def create_file(self, data: EquipmentFileCreate) -> EquipmentFileResult:
        """Persist a file record for stored bytes."""

    async def delete_by_id(self, file_id: str) -> EquipmentFileResult | None:
        """Delete a file record; return what was deleted, or None if missing."""

    def after_commit(self, callback: Callable[[], None]) -> None:
        """Run callback once the current transaction commits."""


class IEquipmentRepository(Protocol):
    """Protocol for equipment repository (DIP)."""

    async def get_by_id(self, equipment_id: str) -> EquipmentResult | None:
        """Return equipment by ID (with primary photo), or None."""

    async def get_by_code(self, code: str) -> EquipmentResult | None:
        """Return equipment by its unique code, or None."""

    async def list_overview(self) -> list[EquipmentResult]:
        """Return all equipment ordered by category then name."""

    async def get_detail(self, equipment_id: str) -> EquipmentDetail | None:
        """Return equipment with its files, or None."""

    async def create_equipment(self, data: EquipmentCreate) -> EquipmentResult:
        """Persist new equipment."""

    async def update_equipment(
        self,
        equipment_id: str,
        data: EquipmentUpdate,
        *,
        primary_photo_id: str | None = None,
    ) -> EquipmentResult:
        """Apply a partial update; set primary_photo_id when given."""

    async def delete_equipment(self, equipment_id: str) -> list[EquipmentFileResult]:
        """Delete equipment and its file rows; return the deleted files."""

    def after_commit(self, callback: Callable[[], None]) -> None:
        """Run callback once the current transaction commits."""
