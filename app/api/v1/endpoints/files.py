"""Equipment file API: upload to an equipment and remove by id."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.api.v1.dependencies import get_equipment_file_service
from app.application.use_cases.files import EquipmentFileService
from app.core.limiter import limit_upload, limit_writes
from app.schemas.file import EquipmentFileDeleteResponse, EquipmentFileItem

router = APIRouter()


@router.post(
    "/equipment/{equipment_id}/files",
    response_model=EquipmentFileItem,
    status_code=201,
)
@limit_upload
async def upload_equipment_file(
    request: Request,
    equipment_id: str,
    svc: Annotated[EquipmentFileService, Depends(get_equipment_file_service)],
    label: str = Form(...),
    file: UploadFile = File(...),
    description: str | None = Form(None),
    uploaded_by: str | None = Form(None),
):
    """Store the uploaded file under the active driver and record it."""
    created = await svc.upload_equipment_file(
        equipment_id=equipment_id,
        label=label,
        content=await file.read(),
        mime_type=file.content_type,
        original_name=file.filename or label,
        description=description,
        uploaded_by=uploaded_by,
    )
    return EquipmentFileItem.model_validate(created)


@router.delete("/files/{file_id}", response_model=EquipmentFileDeleteResponse)
@limit_writes
async def remove_equipment_file(
    request: Request,
    file_id: str,
    svc: Annotated[EquipmentFileService, Depends(get_equipment_file_service)],
):
    """Delete the file record; stored bytes are removed after commit."""
    deleted = await svc.remove_equipment_file(file_id)
    return EquipmentFileDeleteResponse(deleted=EquipmentFileItem.model_validate(deleted))
