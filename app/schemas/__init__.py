"""Pydantic request/response schemas for the API."""

from app.schemas.equipment import (
    EquipmentDetailResponse,
    EquipmentListResponse,
    EquipmentPosition,
    EquipmentResponse,
)
from app.schemas.file import EquipmentFileDeleteResponse, EquipmentFileItem
from app.schemas.health import HealthResponse

__all__ = [
    "EquipmentDetailResponse",
    "EquipmentFileDeleteResponse",
    "EquipmentFileItem",
    "EquipmentListResponse",
    "EquipmentPosition",
    "EquipmentResponse",
    "HealthResponse",
]
