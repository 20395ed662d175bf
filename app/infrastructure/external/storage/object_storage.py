"""S3-compatible object storage: configuration, shared client, and key/URL helpers.

The client is built lazily and shared for the process; it is configured for
path-style addressing so non-AWS endpoints (MinIO, R2, Railway buckets)
work without virtual-host DNS.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, unquote, urlsplit

import boto3
from botocore.config import Config

from app.infrastructure.exceptions import StorageConfigurationError

if TYPE_CHECKING:
    from app.core.config import Settings

S3_URL_PREFIX = "s3://"


@dataclass(frozen=True)
class ObjectStorageConfig:
    """Complete object storage credentials. Built only when all are present."""

    endpoint: str
    region: str
    bucket: str
    access_key_id: str
    secret_access_key: str


def _required_values(settings: "Settings") -> dict[str, str]:
    """Env var name -> configured value ("" when unset) for the four credentials."""
    secret = settings.file_storage_secret_access_key
    return {
        "FILE_STORAGE_ENDPOINT_URL": settings.file_storage_endpoint_url or "",
        "FILE_STORAGE_BUCKET_NAME": settings.file_storage_bucket_name or "",
        "FILE_STORAGE_ACCESS_KEY_ID": settings.file_storage_access_key_id or "",
        "FILE_STORAGE_SECRET_ACCESS_KEY": secret.get_secret_value() if secret else "",
    }


def read_object_storage_config(settings: "Settings") -> ObjectStorageConfig | None:
    """Return the object storage config, or None when any credential is missing."""
    values = _required_values(settings)
    if not all(values.values()):
        return None
    return ObjectStorageConfig(
        endpoint=values["FILE_STORAGE_ENDPOINT_URL"],
        region=settings.file_storage_region or "auto",
        bucket=values["FILE_STORAGE_BUCKET_NAME"],
        access_key_id=values["FILE_STORAGE_ACCESS_KEY_ID"],
        secret_access_key=values["FILE_STORAGE_SECRET_ACCESS_KEY"],
    )


def ensure_object_storage_config(
    settings: "Settings | None" = None,
) -> ObjectStorageConfig:
    """Return the object storage config or raise StorageConfigurationError."""
    from app.core.config import get_settings

    s = settings or get_settings()
    config = read_object_storage_config(s)
    if config is None:
        missing = [name for name, value in _required_values(s).items() if not value]
        raise StorageConfigurationError(missing)
    return config


def create_object_storage_client(config: ObjectStorageConfig) -> Any:
    """Build a boto3 S3 client for the given config (path-style, SigV4)."""
    return boto3.client(
        "s3",
        endpoint_url=config.endpoint,
        region_name=config.region,
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
        config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


@lru_cache(maxsize=1)
def get_object_storage_client() -> Any:
    """Return the shared S3 client, creating it on first use.

    Raises StorageConfigurationError if credentials are incomplete; a failed
    attempt is not cached, so a later call retries with current settings.
    """
    return create_object_storage_client(ensure_object_storage_config())


def object_storage_client_for(config: ObjectStorageConfig) -> Any:
    """Shared client when config matches the environment, otherwise a dedicated one."""
    from app.core.config import get_settings

    if config == read_object_storage_config(get_settings()):
        return get_object_storage_client()
    return create_object_storage_client(config)



def build_object_url(endpoint: str, bucket: str, key: str) -> str:
    """Full URL recorded as stored_path: <endpoint>/<bucket>/<key>.

    Plain concatenation: "." and ".." segments in the key stay literal.
    """
    return f"{endpoint.rstrip('/')}/{bucket}/{quote(key, safe='/')}"


def extract_object_key(stored_path: str | None, bucket: str) -> str | None:
    """Derive the object key from a stored path.

    Stored paths are written as full URLs, but older or hand-entered rows may
    hold bare keys, ``<bucket>/<key>`` or ``s3://<bucket>/<key>``.

    Returns:
        The object key, or None only when stored_path is empty.
    """
    if not stored_path:
        return None

    parts = urlsplit(stored_path)
    if parts.scheme:
        path = unquote(parts.path)
        if path.startswith("/"):
            path = path[1:]
        prefix = f"{bucket}/"
        if path.startswith(prefix):
            return path[len(prefix):]
        return path

    value = stored_path
    if value.startswith(S3_URL_PREFIX):
        value = value[len(S3_URL_PREFIX):]
    prefix = f"{bucket}/"
    if value.startswith(prefix):
        return value[len(prefix):]
    if value.startswith("/"):
        return value[1:]
    return value
