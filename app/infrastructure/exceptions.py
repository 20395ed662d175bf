"""Infrastructure exceptions for storage and external operations.

Storage errors extend DashboardException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import DashboardException


class StorageException(DashboardException):
    """Base exception for storage operations."""


class StorageConfigurationError(StorageException):
    """Object storage was selected or required but its credentials are incomplete."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            "Object storage is not configured correctly. Check "
            "FILE_STORAGE_ENDPOINT_URL, FILE_STORAGE_BUCKET_NAME, "
            "FILE_STORAGE_ACCESS_KEY_ID and FILE_STORAGE_SECRET_ACCESS_KEY.",
            "STORAGE_CONFIGURATION_ERROR",
            {"missing": missing},
        )


class StorageNotFoundError(StorageException):
    """File or object not found in storage."""

    def __init__(self, file_path: str) -> None:
        super().__init__(
            f"File not found: {file_path}",
            "STORAGE_NOT_FOUND",
            {"file_path": file_path},
        )


class StorageUploadError(StorageException):
    """File upload failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDownloadError(StorageException):
    """File download failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to download file: {file_path}",
            "STORAGE_DOWNLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """File deletion failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageSigningError(StorageException):
    """A signed URL could not be produced for the stored object."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Could not sign URL for file: {file_path}",
            "STORAGE_SIGNING_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageNotSupportedError(StorageException):
    """Operation not supported by this storage backend."""

    def __init__(self, operation: str, backend: str) -> None:
        super().__init__(
            f"Operation '{operation}' not supported by {backend} backend",
            "STORAGE_NOT_SUPPORTED",
            {"operation": operation, "backend": backend},
        )


class StoragePermissionError(StorageException):
    """Path escapes the storage root or is otherwise not allowed."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
