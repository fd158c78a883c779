"""Service layer – object storage for uploaded images.

``ObjectStore`` is the capability the upload handler depends on; the
production implementation talks to Google Cloud Storage.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from google.cloud import storage as gcs_storage

from src.image_upload.config import Settings

logger = logging.getLogger(__name__)


class ObjectStore(ABC):
    @property
    @abstractmethod
    def bucket_name(self) -> str:
        """Name of the bucket objects are written to."""

    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str) -> None:
        """Store *data* under *key*, tagged with *content_type*.

        Must not overwrite an existing object; raises if *key* is taken.
        """

    @abstractmethod
    def make_public(self, key: str) -> None:
        """Grant anonymous read access to the object at *key*."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the object at *key*."""


class GCSObjectStore(ObjectStore):
    def __init__(self, bucket_name: str, client: gcs_storage.Client):
        self._bucket = client.bucket(bucket_name)

    @property
    def bucket_name(self) -> str:
        return self._bucket.name

    def save(self, key: str, data: bytes, content_type: str) -> None:
        blob = self._bucket.blob(key)
        # generation 0 means "only if no live object exists at this key"
        blob.upload_from_string(data, content_type=content_type, if_generation_match=0)

    def make_public(self, key: str) -> None:
        self._bucket.blob(key).make_public()

    def delete(self, key: str) -> None:
        self._bucket.blob(key).delete()


def build_object_store(settings: Settings) -> ObjectStore:
    """Create the GCS-backed store described by *settings*.

    Uses the service-account key file when one is configured, otherwise
    application default credentials.
    """
    bucket_name = settings.google_cloud_bucket_name
    if not bucket_name:
        raise ValueError("GOOGLE_CLOUD_BUCKET_NAME environment variable is required")

    if settings.service_account_key_path:
        client = gcs_storage.Client.from_service_account_json(
            settings.service_account_key_path,
            project=settings.google_cloud_project_id,
        )
    else:
        client = gcs_storage.Client(project=settings.google_cloud_project_id)

    logger.info("Using GCS bucket '%s'", bucket_name)
    return GCSObjectStore(bucket_name, client)
