"""Tests for the GCS object store and settings."""

from unittest.mock import MagicMock, patch

import pytest

from src.image_upload.config import Settings
from src.image_upload.services.storage_service import GCSObjectStore, build_object_store

GCS_CLIENT = "src.image_upload.services.storage_service.gcs_storage.Client"


def _store() -> tuple[GCSObjectStore, MagicMock]:
    client = MagicMock()
    client.bucket.return_value.name = "photos"
    return GCSObjectStore("photos", client), client


# ──────────────────────────────────────────────
# GCSObjectStore
# ──────────────────────────────────────────────
def test_bucket_name() -> None:
    store, client = _store()
    client.bucket.assert_called_once_with("photos")
    assert store.bucket_name == "photos"


def test_save_is_create_only() -> None:
    store, client = _store()
    bucket = client.bucket.return_value

    store.save("images/1_a.png", b"data", "image/png")

    bucket.blob.assert_called_once_with("images/1_a.png")
    bucket.blob.return_value.upload_from_string.assert_called_once_with(
        b"data", content_type="image/png", if_generation_match=0,
    )


def test_make_public_and_delete() -> None:
    store, client = _store()
    blob = client.bucket.return_value.blob.return_value

    store.make_public("images/1_a.png")
    store.delete("images/1_a.png")

    blob.make_public.assert_called_once_with()
    blob.delete.assert_called_once_with()


def test_save_propagates_provider_errors() -> None:
    store, client = _store()
    client.bucket.return_value.blob.return_value.upload_from_string.side_effect = RuntimeError("503")

    with pytest.raises(RuntimeError, match="503"):
        store.save("images/1_a.png", b"data", "image/png")


# ──────────────────────────────────────────────
# build_object_store
# ──────────────────────────────────────────────
def test_build_requires_bucket_name() -> None:
    with pytest.raises(ValueError, match="GOOGLE_CLOUD_BUCKET_NAME"):
        build_object_store(Settings(_env_file=None, google_cloud_bucket_name=None))


@patch(GCS_CLIENT)
def test_build_with_service_account_key(mock_client_cls: MagicMock) -> None:
    settings = Settings(
        _env_file=None,
        google_cloud_project_id="proj",
        service_account_key_path="/secrets/key.json",
        google_cloud_bucket_name="photos",
    )

    store = build_object_store(settings)

    mock_client_cls.from_service_account_json.assert_called_once_with("/secrets/key.json", project="proj")
    mock_client_cls.from_service_account_json.return_value.bucket.assert_called_once_with("photos")
    assert isinstance(store, GCSObjectStore)


@patch(GCS_CLIENT)
def test_build_with_default_credentials(mock_client_cls: MagicMock) -> None:
    settings = Settings(_env_file=None, google_cloud_project_id="proj", google_cloud_bucket_name="photos")

    build_object_store(settings)

    mock_client_cls.assert_called_once_with(project="proj")
    mock_client_cls.from_service_account_json.assert_not_called()


# ──────────────────────────────────────────────
# Settings
# ──────────────────────────────────────────────
def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PORT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 3000
    assert settings.max_upload_size == 5_242_880
    assert settings.cors_origins_list == ["*"]


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT_ID", "proj")
    monkeypatch.setenv("SERVICE_ACCOUNT_KEY_PATH", "/secrets/key.json")
    monkeypatch.setenv("GOOGLE_CLOUD_BUCKET_NAME", "photos")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    settings = Settings(_env_file=None)

    assert settings.google_cloud_project_id == "proj"
    assert settings.service_account_key_path == "/secrets/key.json"
    assert settings.google_cloud_bucket_name == "photos"
    assert settings.port == 8080
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
