"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import StorageDriver
from app.domain.exceptions import (
    DashboardException,
    ResourceConflictException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Enums
    "StorageDriver",
    # Exceptions
    "DashboardException",
    "ResourceConflictException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
]
