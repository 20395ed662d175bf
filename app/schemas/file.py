"""Equipment file API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.domain.enums import StorageDriver


class EquipmentFileItem(BaseModel):
    """File record as returned by the API (never carries the inline bytes)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    equipment_id: str
    label: str
    description: str | None = None
    uploaded_by: str | None = None
    file_name: str
    size: int
    mime_type: str | None = None
    storage_type: StorageDriver
    is_primary: bool = False
    uploaded_at: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        """Path of the serving endpoint for this file."""
        return f"/files/{self.id}"


class EquipmentFileDeleteResponse(BaseModel):
    """Response for DELETE /files/{file_id}."""

    deleted: EquipmentFileItem
    message: str = Field(default="Archivo eliminado")
