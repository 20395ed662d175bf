"""Storage: database blob, local filesystem and S3-compatible backends.

FileStorageService is the facade used by the rest of the app. The driver
for new uploads comes from get_active_driver(); each file record keeps the
driver that stored it. Backends are built lazily by StorageFactory, so
boto3 and object storage credentials are only touched when needed.
"""

from app.infrastructure.external.storage.driver import (
    get_active_driver,
    normalize_driver,
    resolve_driver,
)
from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.object_storage import (
    ObjectStorageConfig,
    build_object_url,
    ensure_object_storage_config,
    extract_object_key,
    get_object_storage_client,
    object_storage_client_for,
    read_object_storage_config,
)
from app.infrastructure.external.storage.protocol import StorageBackendProtocol
from app.infrastructure.external.storage.service import (
    FileStorageService,
    generate_unique_name,
    sanitize_file_name,
)

__all__ = [
    "FileStorageService",
    "ObjectStorageConfig",
    "StorageBackendProtocol",
    "StorageFactory",
    "build_object_url",
    "ensure_object_storage_config",
    "extract_object_key",
    "generate_unique_name",
    "get_active_driver",
    "get_object_storage_client",
    "normalize_driver",
    "object_storage_client_for",
    "read_object_storage_config",
    "resolve_driver",
    "sanitize_file_name",
]
