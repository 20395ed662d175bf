"""Domain enumerations for the equipment dashboard.

Enums represent fixed sets of domain values (e.g. where a file's bytes live).
"""

from enum import Enum


class StorageDriver(str, Enum):
    """Backend that holds a file's bytes.

    Resolved once per process for new uploads, then stamped on each file
    record; the stamped value decides how that file is read and deleted.
    """

    DATABASE = "DATABASE"
    FILE_SYSTEM = "FILE_SYSTEM"
    OBJECT_STORAGE = "OBJECT_STORAGE"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid driver values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [driver.value for driver in cls]
