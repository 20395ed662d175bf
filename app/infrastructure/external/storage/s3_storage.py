"""S3-compatible object storage (AWS S3, MinIO, R2, Railway buckets) with presigned URLs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from app.application.dtos.file import StoredFileResult, StoredObject
from app.domain.enums import StorageDriver
from app.infrastructure.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StorageSigningError,
    StorageUploadError,
)
from app.infrastructure.external.storage.object_storage import (
    ObjectStorageConfig,
    build_object_url,
    extract_object_key,
    object_storage_client_for,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3StorageBackend:
    """Object storage keyed as <owner_id>/<unique name> inside one bucket.

    Uses boto3 (sync) via asyncio.to_thread for async API. stored_path is the
    full object URL; keys are recovered with extract_object_key so bare keys
    from older rows keep working.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    driver = StorageDriver.OBJECT_STORAGE

    def __init__(self, config: ObjectStorageConfig, client: Any | None = None) -> None:
        """Initialize with complete credentials.

        Args:
            config: Object storage configuration.
            client: Optional boto3 S3 client; defaults to one built for config.
        """
        self.config = config
        self._client = client if client is not None else object_storage_client_for(config)

    @property
    def bucket(self) -> str:
        return self.config.bucket

    def key_for(self, stored_path: str | None) -> str | None:
        return extract_object_key(stored_path, self.bucket)

    async def save(
        self,
        owner_id: str,
        content: bytes,
        mime_type: str,
        file_name: str,
        unique_name: str,
    ) -> StoredFileResult:
        key = f"{owner_id}/{unique_name}"

        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=mime_type,
            )

        try:
            await asyncio.to_thread(_put)
        except (BotoCoreError, ClientError) as e:
            raise StorageUploadError(key, str(e)) from e

        logger.info("Uploaded %d bytes to %s/%s", len(content), self.bucket, key)
        return StoredFileResult(
            stored_path=build_object_url(self.config.endpoint, self.bucket, key),
            file_name=file_name,
            size=len(content),
            mime_type=mime_type,
            storage_type=StorageDriver.OBJECT_STORAGE,
        )

    async def delete(self, stored_path: str | None) -> None:
        """Delete the object. NoSuchKey counts as success; other failures raise StorageDeleteError."""
        key = self.key_for(stored_path)
        if not key:
            return

        def _delete() -> None:
            self._client.delete_object(Bucket=self.bucket, Key=key)

        try:
            await asyncio.to_thread(_delete)
        except ClientError as e:
            if _error_code(e) == "NoSuchKey":
                return
            raise StorageDeleteError(key, str(e)) from e
        except BotoCoreError as e:
            raise StorageDeleteError(key, str(e)) from e
        logger.info("Deleted %s/%s", self.bucket, key)

    async def read(self, stored_path: str) -> StoredObject:
        """Fetch the object and stream its body."""
        key = self.key_for(stored_path)
        if not key:
            raise StorageNotFoundError(stored_path)

        def _get() -> dict[str, Any]:
            return self._client.get_object(Bucket=self.bucket, Key=key)

        try:
            resp = await asyncio.to_thread(_get)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise StorageNotFoundError(key) from e
            raise StorageDownloadError(key, str(e)) from e
        except BotoCoreError as e:
            raise StorageDownloadError(key, str(e)) from e

        return StoredObject(
            body=self._iter_body(resp["Body"]),
            content_type=resp.get("ContentType"),
            content_length=resp.get("ContentLength"),
            etag=resp.get("ETag"),
            last_modified=resp.get("LastModified"),
        )

    async def _iter_body(self, body: Any) -> AsyncIterator[bytes]:
        try:
            while chunk := await asyncio.to_thread(body.read, self.CHUNK_SIZE):
                yield chunk
        finally:
            body.close()

    async def get_signed_url(self, stored_path: str, expires_in_seconds: int) -> str:
        """Return a presigned GET URL valid for expires_in_seconds."""
        key = self.key_for(stored_path)
        if not key:
            raise StorageSigningError(
                stored_path, "Could not resolve the object key for the stored path"
            )

        def _presign() -> str:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in_seconds,
            )

        try:
            return await asyncio.to_thread(_presign)
        except Exception as e:
            logger.error(
                "Could not generate signed URL (stored_path=%s, bucket=%s, endpoint=%s): %s",
                stored_path,
                self.bucket,
                self.config.endpoint,
                e,
            )
            raise StorageSigningError(stored_path, str(e)) from e
