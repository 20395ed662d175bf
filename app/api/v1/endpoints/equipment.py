"""Equipment API: thin routes delegating to EquipmentService."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile

from app.api.v1.dependencies import get_equipment_query_service, get_equipment_service
from app.application.dtos.equipment import (
    EquipmentCreate,
    EquipmentDetail,
    EquipmentResult,
    EquipmentUpdate,
)
from app.application.dtos.file import UploadedContent
from app.application.use_cases.equipment import EquipmentService
from app.core.limiter import limit_upload, limit_writes
from app.schemas.equipment import (
    EquipmentDetailResponse,
    EquipmentListResponse,
    EquipmentResponse,
)
from app.schemas.file import EquipmentFileItem

router = APIRouter()


def _position(x: float | None, y: float | None) -> dict[str, float] | None:
    if x is None or y is None:
        return None
    return {"x": x, "y": y}


async def _read_photo(photo: UploadFile | None) -> UploadedContent | None:
    if photo is None:
        return None
    return UploadedContent(
        content=await photo.read(),
        file_name=photo.filename or "foto",
        mime_type=photo.content_type,
    )


def _to_response(equipment: EquipmentResult) -> EquipmentResponse:
    return EquipmentResponse.model_validate(equipment)


def _to_detail_response(detail: EquipmentDetail) -> EquipmentDetailResponse:
    base = _to_response(detail.equipment)
    return EquipmentDetailResponse(
        **base.model_dump(exclude={"primary_photo"}),
        primary_photo=base.primary_photo,
        files=[EquipmentFileItem.model_validate(f) for f in detail.files],
    )


@router.get("", response_model=EquipmentListResponse)
async def list_equipment(
    svc: Annotated[EquipmentService, Depends(get_equipment_query_service)],
):
    """Equipment overview ordered by category then name, with primary photos."""
    items = await svc.list_overview()
    return EquipmentListResponse(
        items=[_to_response(e) for e in items],
        total=len(items),
    )


@router.get("/{equipment_id}", response_model=EquipmentDetailResponse)
async def get_equipment(
    equipment_id: str,
    svc: Annotated[EquipmentService, Depends(get_equipment_query_service)],
):
    """Equipment detail with all files, newest first."""
    return _to_detail_response(await svc.get_detail(equipment_id))


@router.post("", response_model=EquipmentResponse, status_code=201)
@limit_upload
async def create_equipment(
    request: Request,
    svc: Annotated[EquipmentService, Depends(get_equipment_service)],
    name: str = Form(...),
    code: str = Form(...),
    category: str = Form(...),
    description: str | None = Form(None),
    notes: str | None = Form(None),
    position_x: float | None = Form(None),
    position_y: float | None = Form(None),
    photo: UploadFile | None = File(None),
):
    """Create equipment; a non-empty photo becomes its primary photo."""
    created = await svc.create_equipment(
        EquipmentCreate(
            name=name.strip(),
            code=code.strip(),
            category=category.strip(),
            description=description,
            notes=notes,
            position=_position(position_x, position_y),
        ),
        photo=await _read_photo(photo),
    )
    return _to_response(created)


@router.put("/{equipment_id}", response_model=EquipmentResponse)
@limit_upload
async def update_equipment(
    request: Request,
    equipment_id: str,
    svc: Annotated[EquipmentService, Depends(get_equipment_service)],
    name: str | None = Form(None),
    code: str | None = Form(None),
    category: str | None = Form(None),
    description: str | None = Form(None),
    notes: str | None = Form(None),
    position_x: float | None = Form(None),
    position_y: float | None = Form(None),
    photo: UploadFile | None = File(None),
):
    """Partially update equipment; a non-empty photo replaces the primary photo."""
    updated = await svc.update_equipment(
        equipment_id,
        EquipmentUpdate(
            name=name.strip() if name is not None else None,
            code=code.strip() if code is not None else None,
            category=category.strip() if category is not None else None,
            description=description,
            notes=notes,
            position=_position(position_x, position_y),
        ),
        photo=await _read_photo(photo),
    )
    return _to_response(updated)


@router.delete("/{equipment_id}", status_code=204)
@limit_writes
async def delete_equipment(
    request: Request,
    equipment_id: str,
    svc: Annotated[EquipmentService, Depends(get_equipment_service)],
):
    """Delete equipment and its files; stored bytes are removed after commit."""
    await svc.delete_equipment(equipment_id)
    return Response(status_code=204)
