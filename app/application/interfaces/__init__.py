"""Application interfaces (ports): repository and storage protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    IEquipmentFileRepository,
    IEquipmentRepository,
)
from app.application.interfaces.storage import IFileStorageService

__all__ = [
    "IEquipmentFileRepository",
    "IEquipmentRepository",
    "IFileStorageService",
]
