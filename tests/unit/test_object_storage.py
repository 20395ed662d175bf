"""Unit tests for object storage configuration, client creation and key/URL helpers."""

from unittest.mock import patch

import pytest
from pydantic import SecretStr

from app.core.config import Settings
from app.infrastructure.exceptions import StorageConfigurationError
from app.infrastructure.external.storage.object_storage import (
    ObjectStorageConfig,
    build_object_url,
    create_object_storage_client,
    ensure_object_storage_config,
    extract_object_key,
    get_object_storage_client,
    object_storage_client_for,
    read_object_storage_config,
)

BUCKET = "equipment"
ENDPOINT = "https://storage.example.com"


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def _complete(**overrides) -> Settings:
    values = {
        "file_storage_endpoint_url": ENDPOINT,
        "file_storage_bucket_name": BUCKET,
        "file_storage_access_key_id": "AKIA",
        "file_storage_secret_access_key": SecretStr("secret"),
    }
    values.update(overrides)
    return _settings(**values)


class TestConfigCompleteness:
    def test_complete_config(self) -> None:
        config = read_object_storage_config(_complete())
        assert config == ObjectStorageConfig(
            endpoint=ENDPOINT,
            region="auto",
            bucket=BUCKET,
            access_key_id="AKIA",
            secret_access_key="secret",
        )

    def test_region_is_configurable(self) -> None:
        config = read_object_storage_config(_complete(file_storage_region="us-east-1"))
        assert config is not None
        assert config.region == "us-east-1"

    def test_missing_value_returns_none(self) -> None:
        assert read_object_storage_config(_complete(file_storage_bucket_name="")) is None
        assert read_object_storage_config(_settings()) is None

    def test_ensure_lists_every_missing_variable(self) -> None:
        with pytest.raises(StorageConfigurationError) as exc_info:
            ensure_object_storage_config(
                _settings(file_storage_endpoint_url=ENDPOINT)
            )
        missing = exc_info.value.details["missing"]
        assert missing == [
            "FILE_STORAGE_BUCKET_NAME",
            "FILE_STORAGE_ACCESS_KEY_ID",
            "FILE_STORAGE_SECRET_ACCESS_KEY",
        ]

    def test_ensure_reads_process_settings_by_default(self) -> None:
        with pytest.raises(StorageConfigurationError):
            ensure_object_storage_config()


class TestClient:
    def test_client_uses_path_style_and_sigv4(self) -> None:
        config = read_object_storage_config(_complete())
        with patch(
            "app.infrastructure.external.storage.object_storage.boto3.client"
        ) as client_factory:
            create_object_storage_client(config)
        args, kwargs = client_factory.call_args
        assert args == ("s3",)
        assert kwargs["endpoint_url"] == ENDPOINT
        assert kwargs["region_name"] == "auto"
        assert kwargs["aws_access_key_id"] == "AKIA"
        assert kwargs["aws_secret_access_key"] == "secret"
        assert kwargs["config"].signature_version == "s3v4"
        assert kwargs["config"].s3 == {"addressing_style": "path"}

    def test_shared_client_is_built_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FILE_STORAGE_ENDPOINT_URL", ENDPOINT)
        monkeypatch.setenv("FILE_STORAGE_BUCKET_NAME", BUCKET)
        monkeypatch.setenv("FILE_STORAGE_ACCESS_KEY_ID", "AKIA")
        monkeypatch.setenv("FILE_STORAGE_SECRET_ACCESS_KEY", "secret")
        with patch(
            "app.infrastructure.external.storage.object_storage.boto3.client"
        ) as client_factory:
            first = get_object_storage_client()
            second = get_object_storage_client()
        assert first is second
        client_factory.assert_called_once()

    def test_failed_client_creation_is_not_cached(self) -> None:
        with pytest.raises(StorageConfigurationError):
            get_object_storage_client()
        assert get_object_storage_client.cache_info().currsize == 0

    def test_client_for_environment_config_is_shared(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FILE_STORAGE_ENDPOINT_URL", ENDPOINT)
        monkeypatch.setenv("FILE_STORAGE_BUCKET_NAME", BUCKET)
        monkeypatch.setenv("FILE_STORAGE_ACCESS_KEY_ID", "AKIA")
        monkeypatch.setenv("FILE_STORAGE_SECRET_ACCESS_KEY", "secret")
        config = ObjectStorageConfig(ENDPOINT, "auto", BUCKET, "AKIA", "secret")
        with patch("app.infrastructure.external.storage.object_storage.boto3.client"):
            assert object_storage_client_for(config) is get_object_storage_client()

    def test_client_for_other_config_is_dedicated(self) -> None:
        config = ObjectStorageConfig("https://minio.local:9000", "us-east-1", "b", "k", "s")
        with patch(
            "app.infrastructure.external.storage.object_storage.boto3.client"
        ) as client_factory:
            object_storage_client_for(config)
        assert client_factory.call_args.kwargs["endpoint_url"] == "https://minio.local:9000"
        assert client_factory.call_args.kwargs["region_name"] == "us-east-1"
        assert get_object_storage_client.cache_info().currsize == 0


class TestExtractObjectKey:
    def test_full_url_with_bucket(self) -> None:
        url = f"{ENDPOINT}/{BUCKET}/eq1/123-abc-photo.jpg"
        assert extract_object_key(url, BUCKET) == "eq1/123-abc-photo.jpg"

    def test_full_url_without_bucket_returns_path(self) -> None:
        url = f"{ENDPOINT}/eq1/photo.jpg"
        assert extract_object_key(url, BUCKET) == "eq1/photo.jpg"

    def test_url_path_is_percent_decoded(self) -> None:
        url = f"{ENDPOINT}/{BUCKET}/eq1/foto%20principal.jpg"
        assert extract_object_key(url, BUCKET) == "eq1/foto principal.jpg"

    def test_bare_key(self) -> None:
        assert extract_object_key("eq1/photo.jpg", BUCKET) == "eq1/photo.jpg"

    def test_bucket_prefixed_key(self) -> None:
        assert extract_object_key(f"{BUCKET}/eq1/photo.jpg", BUCKET) == "eq1/photo.jpg"

    def test_s3_scheme(self) -> None:
        assert extract_object_key(f"s3://{BUCKET}/eq1/photo.jpg", BUCKET) == "eq1/photo.jpg"

    def test_leading_slash_is_stripped(self) -> None:
        assert extract_object_key("/eq1/photo.jpg", BUCKET) == "eq1/photo.jpg"

    def test_empty_returns_none(self) -> None:
        assert extract_object_key(None, BUCKET) is None
        assert extract_object_key("", BUCKET) is None

    @pytest.mark.parametrize(
        "key",
        [
            "eq1/1700000000000-uuid-photo.jpg",
            "eq1/foto principal.png",
            "eq1/informe_técnico.pdf",
            "eq1/a+b&c.txt",
            "eq1/1-u-../../eq2/photo.jpg",
            "eq1/1-u-a/./b.jpg",
            "eq1/..",
        ],
    )
    def test_extract_inverts_build(self, key: str) -> None:
        for endpoint in (ENDPOINT, f"{ENDPOINT}/"):
            url = build_object_url(endpoint, BUCKET, key)
            assert extract_object_key(url, BUCKET) == key


def test_build_object_url_joins_endpoint_bucket_and_key() -> None:
    assert (
        build_object_url(ENDPOINT, BUCKET, "eq1/photo.jpg")
        == f"{ENDPOINT}/{BUCKET}/eq1/photo.jpg"
    )


def test_build_object_url_keeps_dot_segments() -> None:
    url = build_object_url(f"{ENDPOINT}/", BUCKET, "eq1/1-u-../../eq2/photo.jpg")
    assert url == f"{ENDPOINT}/{BUCKET}/eq1/1-u-../../eq2/photo.jpg"
