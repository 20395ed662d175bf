"""File serving endpoint: GET /files/{file_id}.

Database records are answered with their inline bytes. Object storage
records are streamed through the service; when streaming fails the client is
redirected to a short-lived signed URL instead. Filesystem records redirect
to their file:// location.
"""

import logging
from typing import Annotated
from urllib.parse import quote, urljoin

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, RedirectResponse, Response, StreamingResponse

from app.api.v1.dependencies import get_equipment_file_repo, get_file_storage_service
from app.application.dtos.file import DEFAULT_MIME_TYPE, EquipmentFileResult
from app.application.interfaces.repositories import IEquipmentFileRepository
from app.application.interfaces.storage import IFileStorageService
from app.core.constants import (
    DATABASE_FILE_CACHE_CONTROL,
    FALLBACK_SIGNED_URL_SECONDS,
    FILE_CONTENT_UNAVAILABLE_MESSAGE,
    FILE_NOT_FOUND_MESSAGE,
    FILE_PATH_UNAVAILABLE_MESSAGE,
    FILE_RETRIEVAL_FAILED_MESSAGE,
    FILE_URL_BASE,
    OBJECT_FILE_CACHE_CONTROL,
)
from app.domain.enums import StorageDriver
from app.shared.utils.datetime import http_date

logger = logging.getLogger(__name__)

router = APIRouter()


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def content_disposition(file_name: str) -> str:
    """Inline disposition with double quotes in the name escaped.

    Headers are latin-1 on the wire, so non-ASCII names get an ASCII
    ``filename`` plus an RFC 5987 ``filename*`` carrying the UTF-8 name.
    """
    fallback = file_name.encode("ascii", "replace").decode("ascii")
    escaped = fallback.replace("\\", "\\\\").replace('"', '\\"')
    header = f'inline; filename="{escaped}"'
    if fallback != file_name:
        header += f"; filename*=UTF-8''{quote(file_name, safe='')}"
    return header


def _serve_inline(record: EquipmentFileResult) -> Response:
    if record.data is None:
        return _message(404, FILE_CONTENT_UNAVAILABLE_MESSAGE)
    return Response(
        content=record.data,
        media_type=record.mime_type or DEFAULT_MIME_TYPE,
        headers={
            "Content-Length": str(record.size),
            "Content-Disposition": content_disposition(record.file_name),
            "Cache-Control": DATABASE_FILE_CACHE_CONTROL,
        },
    )


async def _serve_object(
    record: EquipmentFileResult, stored_path: str, storage: IFileStorageService
) -> Response:
    try:
        obj = await storage.read(stored_path, StorageDriver.OBJECT_STORAGE)
    except Exception:
        logger.exception(
            "Streaming file %s from object storage failed (%s); trying signed URL",
            record.id,
            stored_path,
        )
    else:
        headers = {
            "Content-Disposition": content_disposition(record.file_name),
            "Cache-Control": OBJECT_FILE_CACHE_CONTROL,
        }
        if obj.content_length is not None:
            headers["Content-Length"] = str(obj.content_length)
        if obj.etag:
            headers["ETag"] = obj.etag
        if obj.last_modified is not None:
            headers["Last-Modified"] = http_date(obj.last_modified)
        return StreamingResponse(
            obj.body,
            media_type=obj.content_type or record.mime_type or DEFAULT_MIME_TYPE,
            headers=headers,
        )

    try:
        url = await storage.get_signed_url(stored_path, FALLBACK_SIGNED_URL_SECONDS)
    except Exception:
        logger.exception(
            "Signing URL for file %s failed (%s)", record.id, stored_path
        )
        return _message(502, FILE_RETRIEVAL_FAILED_MESSAGE)
    return RedirectResponse(url, status_code=307)


@router.get("/{file_id}")
async def serve_file(
    file_id: str,
    repo: Annotated[IEquipmentFileRepository, Depends(get_equipment_file_repo)],
    storage: Annotated[IFileStorageService, Depends(get_file_storage_service)],
) -> Response:
    """Return the file bytes or a redirect to where they live."""
    record = await repo.get_by_id(file_id, include_data=True)
    if record is None:
        return _message(404, FILE_NOT_FOUND_MESSAGE)

    if record.storage_type == StorageDriver.DATABASE:
        return _serve_inline(record)

    if not record.stored_path:
        return _message(404, FILE_PATH_UNAVAILABLE_MESSAGE)

    if record.storage_type == StorageDriver.OBJECT_STORAGE:
        return await _serve_object(record, record.stored_path, storage)

    return RedirectResponse(urljoin(FILE_URL_BASE, record.stored_path), status_code=307)
