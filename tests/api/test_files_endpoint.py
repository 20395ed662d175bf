"""GET /files/{file_id}: inline bytes, streaming, signed-URL fallback and redirects."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from app.api.files import content_disposition
from app.api.v1.dependencies import get_equipment_file_repo, get_file_storage_service
from app.application.dtos.file import EquipmentFileResult, StoredObject
from app.core.constants import (
    FILE_CONTENT_UNAVAILABLE_MESSAGE,
    FILE_NOT_FOUND_MESSAGE,
    FILE_PATH_UNAVAILABLE_MESSAGE,
    FILE_RETRIEVAL_FAILED_MESSAGE,
)
from app.domain.enums import StorageDriver
from app.infrastructure.exceptions import StorageDownloadError, StorageSigningError
from app.main import app

OBJECT_URL = "https://storage.example.com/equipment/eq1/1700000000000-u-manual.pdf"


def _record(**overrides) -> EquipmentFileResult:
    values = {
        "id": "f1",
        "equipment_id": "eq1",
        "label": "Manual",
        "description": None,
        "uploaded_by": None,
        "file_name": "manual.pdf",
        "size": 5,
        "mime_type": "application/pdf",
        "stored_path": OBJECT_URL,
        "storage_type": StorageDriver.OBJECT_STORAGE,
        "is_primary": False,
        "uploaded_at": datetime(2024, 1, 1, tzinfo=UTC),
    }
    values.update(overrides)
    return EquipmentFileResult(**values)


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    app.dependency_overrides[get_equipment_file_repo] = lambda: repo
    return repo


@pytest.fixture
def storage() -> AsyncMock:
    storage = AsyncMock()
    app.dependency_overrides[get_file_storage_service] = lambda: storage
    return storage


async def test_unknown_file_is_404(client: AsyncClient, repo, storage) -> None:
    repo.get_by_id.return_value = None
    response = await client.get("/files/missing")
    assert response.status_code == 404
    assert response.json() == {"message": FILE_NOT_FOUND_MESSAGE}
    repo.get_by_id.assert_awaited_once_with("missing", include_data=True)


async def test_database_file_is_served_inline(client: AsyncClient, repo, storage) -> None:
    repo.get_by_id.return_value = _record(
        file_name='plano "v2".png',
        mime_type="image/png",
        stored_path=None,
        storage_type=StorageDriver.DATABASE,
        data=b"\x89PNG!",
    )
    response = await client.get("/files/f1")

    assert response.status_code == 200
    assert response.content == b"\x89PNG!"
    assert response.headers["content-type"] == "image/png"
    assert response.headers["content-length"] == "5"
    assert response.headers["content-disposition"] == 'inline; filename="plano \\"v2\\".png"'
    assert response.headers["cache-control"] == "public, max-age=60"
    storage.read.assert_not_awaited()


async def test_database_file_without_bytes_is_404(client: AsyncClient, repo, storage) -> None:
    repo.get_by_id.return_value = _record(
        stored_path=None, storage_type=StorageDriver.DATABASE, data=None
    )
    response = await client.get("/files/f1")
    assert response.status_code == 404
    assert response.json() == {"message": FILE_CONTENT_UNAVAILABLE_MESSAGE}


async def test_missing_path_is_404(client: AsyncClient, repo, storage) -> None:
    repo.get_by_id.return_value = _record(stored_path=None)
    response = await client.get("/files/f1")
    assert response.status_code == 404
    assert response.json() == {"message": FILE_PATH_UNAVAILABLE_MESSAGE}


async def test_object_storage_file_is_streamed(client: AsyncClient, repo, storage) -> None:
    repo.get_by_id.return_value = _record()
    storage.read.return_value = StoredObject(
        body=_chunks(b"%PDF", b"-1"),
        content_type="application/pdf",
        content_length=6,
        etag='"abc"',
        last_modified=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
    )

    response = await client.get("/files/f1")

    assert response.status_code == 200
    assert response.content == b"%PDF-1"
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-length"] == "6"
    assert response.headers["etag"] == '"abc"'
    assert response.headers["last-modified"] == "Wed, 01 May 2024 12:00:00 GMT"
    assert response.headers["cache-control"] == "private, max-age=60"
    assert response.headers["content-disposition"] == 'inline; filename="manual.pdf"'
    storage.read.assert_awaited_once_with(OBJECT_URL, StorageDriver.OBJECT_STORAGE)


async def test_stream_without_upstream_type_falls_back_to_record(
    client: AsyncClient, repo, storage
) -> None:
    repo.get_by_id.return_value = _record(mime_type="image/jpeg")
    storage.read.return_value = StoredObject(body=_chunks(b"jpg"))
    response = await client.get("/files/f1")
    assert response.headers["content-type"] == "image/jpeg"
    assert "etag" not in response.headers


async def test_stream_failure_redirects_to_signed_url(
    client: AsyncClient, repo, storage
) -> None:
    repo.get_by_id.return_value = _record()
    storage.read.side_effect = StorageDownloadError(OBJECT_URL, "timeout")
    storage.get_signed_url.return_value = "https://signed.example.com/manual.pdf?sig=1"

    response = await client.get("/files/f1")

    assert response.status_code == 307
    assert response.headers["location"] == "https://signed.example.com/manual.pdf?sig=1"
    storage.get_signed_url.assert_awaited_once_with(OBJECT_URL, 60)


async def test_stream_and_signing_failure_is_502(
    client: AsyncClient, repo, storage, caplog
) -> None:
    repo.get_by_id.return_value = _record()
    storage.read.side_effect = StorageDownloadError(OBJECT_URL, "timeout")
    storage.get_signed_url.side_effect = StorageSigningError(OBJECT_URL, "bad credentials")

    response = await client.get("/files/f1")

    assert response.status_code == 502
    assert response.json() == {"message": FILE_RETRIEVAL_FAILED_MESSAGE}
    assert OBJECT_URL in caplog.text


async def test_filesystem_file_redirects_to_file_url(
    client: AsyncClient, repo, storage
) -> None:
    repo.get_by_id.return_value = _record(
        stored_path="/srv/files/eq1/1-u-manual.pdf",
        storage_type=StorageDriver.FILE_SYSTEM,
    )
    response = await client.get("/files/f1")
    assert response.status_code == 307
    assert response.headers["location"] == "file:///srv/files/eq1/1-u-manual.pdf"
    storage.read.assert_not_awaited()


@pytest.mark.parametrize(
    ("name", "header"),
    [
        ("a.pdf", 'inline; filename="a.pdf"'),
        ('say "hi".txt', 'inline; filename="say \\"hi\\".txt"'),
        (
            "informe\u2013final.pdf",
            "inline; filename=\"informe?final.pdf\"; filename*=UTF-8''informe%E2%80%93final.pdf",
        ),
        (
            "informe t\u00e9cnico.pdf",
            "inline; filename=\"informe t?cnico.pdf\"; filename*=UTF-8''informe%20t%C3%A9cnico.pdf",
        ),
    ],
)
def test_content_disposition(name: str, header: str) -> None:
    assert content_disposition(name) == header


async def test_non_ascii_file_name_is_served(client: AsyncClient, repo, storage) -> None:
    repo.get_by_id.return_value = _record(
        file_name="plano–v2.png",
        mime_type="image/png",
        stored_path=None,
        storage_type=StorageDriver.DATABASE,
        data=b"\x89PNG!",
    )
    response = await client.get("/files/f1")

    assert response.status_code == 200
    assert response.content == b"\x89PNG!"
    assert response.headers["content-disposition"] == (
        "inline; filename=\"plano?v2.png\"; filename*=UTF-8''plano%E2%80%93v2.png"
    )
