"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Storage settings keep the FILE_STORAGE_* names used by
existing deployments; hosting markers are read so the storage driver can
default sensibly on platforms without persistent disk.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Everything has a default so the service starts with no configuration
    (filesystem storage, no SQL database). Routes that need the database
    fail with SqlNotConfiguredException until DATABASE_URL is set.
    """

    # App
    app_name: str = "equipment-dashboard"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (postgresql+asyncpg://...). Empty means "not configured".
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # File storage
    file_storage_driver: str | None = None
    file_storage_path: str = "./storage/files"
    file_storage_endpoint_url: str | None = None
    file_storage_bucket_name: str | None = None
    file_storage_access_key_id: str | None = None
    file_storage_secret_access_key: SecretStr | None = None
    file_storage_region: str = "auto"
    file_signed_url_expires_seconds: int = 120
    max_upload_size: int = 25 * 1024 * 1024  # 25MB

    # Hosting platform markers (any one set means "hosted, no durable disk").
    railway_environment_name: str | None = None
    railway_static_url: str | None = None
    railway_project_id: str | None = None

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Reject values that would make uploads or signed URLs unusable."""
        if self.file_signed_url_expires_seconds <= 0:
            raise ValueError(
                "FILE_SIGNED_URL_EXPIRES_SECONDS must be a positive number of seconds"
            )
        if self.max_upload_size <= 0:
            raise ValueError("MAX_UPLOAD_SIZE must be a positive number of bytes")
        if not self.file_storage_path.strip():
            raise ValueError("FILE_STORAGE_PATH cannot be empty")
        return self

    @property
    def has_platform_marker(self) -> bool:
        """True when any hosting platform marker is present."""
        return bool(
            self.railway_environment_name
            or self.railway_static_url
            or self.railway_project_id
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
