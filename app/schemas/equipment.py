"""Equipment API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.file import EquipmentFileItem


class EquipmentPosition(BaseModel):
    """Position of the equipment on the floor plan."""

    x: float
    y: float


class EquipmentResponse(BaseModel):
    """Equipment with its primary photo (overview and create/update responses)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    code: str
    category: str
    description: str | None = None
    notes: str | None = None
    position: EquipmentPosition | None = None
    primary_photo_id: str | None = None
    primary_photo: EquipmentFileItem | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EquipmentDetailResponse(EquipmentResponse):
    """Equipment with all attached files, newest first."""

    files: list[EquipmentFileItem] = Field(default_factory=list)


class EquipmentListResponse(BaseModel):
    """Response for GET /equipment."""

    items: list[EquipmentResponse]
    total: int
