"""DTOs for equipment use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.application.dtos.file import EquipmentFileResult


@dataclass(frozen=True)
class EquipmentCreate:
    """Input for creating an equipment record."""

    name: str
    code: str
    category: str
    description: str | None = None
    notes: str | None = None
    position: dict[str, float] | None = None


@dataclass(frozen=True)
class EquipmentUpdate:
    """Partial update; None means "leave unchanged"."""

    name: str | None = None
    code: str | None = None
    category: str | None = None
    description: str | None = None
    notes: str | None = None
    position: dict[str, float] | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were provided."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class EquipmentResult:
    """Equipment read-model with its primary photo (overview)."""

    id: str
    name: str
    code: str
    category: str
    description: str | None
    notes: str | None
    position: dict[str, float] | None
    primary_photo_id: str | None
    created_at: datetime | None
    updated_at: datetime | None
    primary_photo: EquipmentFileResult | None = None


@dataclass(frozen=True)
class EquipmentDetail:
    """Equipment with all attached files, newest first."""

    equipment: EquipmentResult
    files: list[EquipmentFileResult] = field(default_factory=list)
