"""Health check endpoint. No database access; used for liveness probes."""

from fastapi import APIRouter

from app.infrastructure.external.storage import get_active_driver
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok status and the storage driver new uploads go to."""
    return HealthResponse(storage_driver=get_active_driver().value)
