"""Equipment and equipment-file routes with the services replaced by mocks."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import (
    get_equipment_file_service,
    get_equipment_query_service,
    get_equipment_service,
)
from app.application.dtos.equipment import EquipmentDetail, EquipmentResult
from app.application.dtos.file import EquipmentFileResult, UploadedContent
from app.domain.enums import StorageDriver
from app.domain.exceptions import (
    ResourceConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from app.main import app

NOW = datetime(2024, 1, 1, tzinfo=UTC)


def _photo(**overrides) -> EquipmentFileResult:
    values = {
        "id": "p1",
        "equipment_id": "eq1",
        "label": "Foto principal",
        "description": None,
        "uploaded_by": "Sistema",
        "file_name": "TOR-01-foto-principal.jpg",
        "size": 4,
        "mime_type": "image/jpeg",
        "stored_path": None,
        "storage_type": StorageDriver.DATABASE,
        "is_primary": True,
        "uploaded_at": NOW,
    }
    values.update(overrides)
    return EquipmentFileResult(**values)


def _equipment(**overrides) -> EquipmentResult:
    values = {
        "id": "eq1",
        "name": "Torno",
        "code": "TOR-01",
        "category": "Mecanizado",
        "description": None,
        "notes": None,
        "position": {"x": 10.0, "y": 20.5},
        "primary_photo_id": None,
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return EquipmentResult(**values)


@pytest.fixture
def equipment_svc() -> MagicMock:
    svc = MagicMock()
    svc.list_overview = AsyncMock(return_value=[])
    svc.get_detail = AsyncMock()
    svc.create_equipment = AsyncMock(return_value=_equipment())
    svc.update_equipment = AsyncMock(return_value=_equipment())
    svc.delete_equipment = AsyncMock(return_value=None)
    app.dependency_overrides[get_equipment_service] = lambda: svc
    app.dependency_overrides[get_equipment_query_service] = lambda: svc
    return svc


@pytest.fixture
def file_svc() -> MagicMock:
    svc = MagicMock()
    svc.upload_equipment_file = AsyncMock()
    svc.remove_equipment_file = AsyncMock()
    app.dependency_overrides[get_equipment_file_service] = lambda: svc
    return svc


class TestEquipmentRoutes:
    async def test_list_overview(self, client: AsyncClient, equipment_svc) -> None:
        equipment_svc.list_overview.return_value = [
            _equipment(primary_photo_id="p1", primary_photo=_photo()),
            _equipment(id="eq2", code="FRE-01", name="Fresadora", position=None),
        ]
        response = await client.get("/api/v1/equipment")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        first, second = body["items"]
        assert first["position"] == {"x": 10.0, "y": 20.5}
        assert first["primary_photo"]["url"] == "/files/p1"
        assert "data" not in first["primary_photo"]
        assert second["primary_photo"] is None
        assert second["position"] is None

    async def test_detail_lists_files(self, client: AsyncClient, equipment_svc) -> None:
        equipment_svc.get_detail.return_value = EquipmentDetail(
            equipment=_equipment(primary_photo_id="p1", primary_photo=_photo()),
            files=[
                _photo(id="f2", label="Manual", is_primary=False),
                _photo(),
            ],
        )
        response = await client.get("/api/v1/equipment/eq1")

        assert response.status_code == 200
        body = response.json()
        assert [f["id"] for f in body["files"]] == ["f2", "p1"]
        assert body["primary_photo"]["id"] == "p1"

    async def test_detail_missing_is_404(self, client: AsyncClient, equipment_svc) -> None:
        equipment_svc.get_detail.side_effect = ResourceNotFoundException("equipment", "nope")
        response = await client.get("/api/v1/equipment/nope")
        assert response.status_code == 404
        assert response.json()["error"] == "RESOURCE_NOT_FOUND"

    async def test_create_with_photo(self, client: AsyncClient, equipment_svc) -> None:
        response = await client.post(
            "/api/v1/equipment",
            data={
                "name": " Torno ",
                "code": "TOR-01",
                "category": "Mecanizado",
                "position_x": "10",
                "position_y": "20.5",
            },
            files={"photo": ("torno.jpg", b"\xff\xd8ab", "image/jpeg")},
        )

        assert response.status_code == 201
        data, photo = equipment_svc.create_equipment.await_args.args[0], (
            equipment_svc.create_equipment.await_args.kwargs["photo"]
        )
        assert data.name == "Torno"
        assert data.position == {"x": 10.0, "y": 20.5}
        assert photo == UploadedContent(
            content=b"\xff\xd8ab", file_name="torno.jpg", mime_type="image/jpeg"
        )

    async def test_create_without_photo(self, client: AsyncClient, equipment_svc) -> None:
        response = await client.post(
            "/api/v1/equipment",
            data={"name": "Torno", "code": "TOR-01", "category": "Mecanizado"},
        )
        assert response.status_code == 201
        assert equipment_svc.create_equipment.await_args.kwargs["photo"] is None
        assert equipment_svc.create_equipment.await_args.args[0].position is None

    async def test_create_missing_field_is_422(self, client: AsyncClient, equipment_svc) -> None:
        response = await client.post("/api/v1/equipment", data={"name": "Torno"})
        assert response.status_code == 422
        equipment_svc.create_equipment.assert_not_awaited()

    async def test_create_duplicate_code_is_409(self, client: AsyncClient, equipment_svc) -> None:
        equipment_svc.create_equipment.side_effect = ResourceConflictException(
            "equipment", "code", "TOR-01"
        )
        response = await client.post(
            "/api/v1/equipment",
            data={"name": "Torno", "code": "TOR-01", "category": "Mecanizado"},
        )
        assert response.status_code == 409

    async def test_update_partial(self, client: AsyncClient, equipment_svc) -> None:
        response = await client.put("/api/v1/equipment/eq1", data={"notes": "Revisado"})

        assert response.status_code == 200
        equipment_id, data = equipment_svc.update_equipment.await_args.args
        assert equipment_id == "eq1"
        assert data.notes == "Revisado"
        assert data.name is None
        assert data.changes() == {"notes": "Revisado"}

    async def test_update_blank_name_is_400(self, client: AsyncClient, equipment_svc) -> None:
        equipment_svc.update_equipment.side_effect = ValidationException(
            "El nombre es obligatorio", field="name"
        )
        response = await client.put("/api/v1/equipment/eq1", data={"name": " "})
        assert response.status_code == 400
        assert response.json()["details"] == {"field": "name"}

    async def test_delete(self, client: AsyncClient, equipment_svc) -> None:
        response = await client.delete("/api/v1/equipment/eq1")
        assert response.status_code == 204
        equipment_svc.delete_equipment.assert_awaited_once_with("eq1")


class TestEquipmentFileRoutes:
    async def test_upload(self, client: AsyncClient, file_svc) -> None:
        file_svc.upload_equipment_file.return_value = _photo(
            id="f9", label="Manual", file_name="Manual.pdf", mime_type="application/pdf",
            is_primary=False, uploaded_by="ana",
        )
        response = await client.post(
            "/api/v1/equipment/eq1/files",
            data={"label": "Manual", "uploaded_by": "ana"},
            files={"file": ("manual.pdf", b"%PDF", "application/pdf")},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["url"] == "/files/f9"
        assert body["storage_type"] == "DATABASE"
        file_svc.upload_equipment_file.assert_awaited_once_with(
            equipment_id="eq1",
            label="Manual",
            content=b"%PDF",
            mime_type="application/pdf",
            original_name="manual.pdf",
            description=None,
            uploaded_by="ana",
        )

    async def test_upload_requires_file(self, client: AsyncClient, file_svc) -> None:
        response = await client.post(
            "/api/v1/equipment/eq1/files", data={"label": "Manual"}
        )
        assert response.status_code == 422

    async def test_remove(self, client: AsyncClient, file_svc) -> None:
        file_svc.remove_equipment_file.return_value = _photo(id="f9", is_primary=False)
        response = await client.delete("/api/v1/files/f9")

        assert response.status_code == 200
        body = response.json()
        assert body["deleted"]["id"] == "f9"
        assert body["message"] == "Archivo eliminado"

    async def test_remove_missing_is_404(self, client: AsyncClient, file_svc) -> None:
        file_svc.remove_equipment_file.side_effect = ResourceNotFoundException(
            "equipment_file", "nope"
        )
        response = await client.delete("/api/v1/files/nope")
        assert response.status_code == 404
