"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the storage facade and the
application use cases. Routes depend only on these dependencies, not on
infrastructure directly; tests swap them via app.dependency_overrides.
"""

from app.api.v1.dependencies.equipment import (
    get_equipment_query_service,
    get_equipment_service,
)
from app.api.v1.dependencies.files import (
    get_equipment_file_repo,
    get_equipment_file_service,
)
from app.api.v1.dependencies.storage import get_cleanup, get_file_storage_service

__all__ = [
    "get_cleanup",
    "get_equipment_file_repo",
    "get_equipment_file_service",
    "get_equipment_query_service",
    "get_equipment_service",
    "get_file_storage_service",
]
