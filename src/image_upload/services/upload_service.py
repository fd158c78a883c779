"""Service layer – upload orchestration.

Turns a parsed ``UploadRequest`` into a stored, publicly readable object:

1. save the bytes under a fresh storage key,
2. mark the object public,
3. derive the public URL from the bucket name and key.

Type and size limits are enforced by the transport before ``handle`` runs.
"""

from __future__ import annotations

import logging
import time

from src.image_upload.config import PUBLIC_URL_BASE, STORAGE_KEY_PREFIX
from src.image_upload.errors import MissingFile, StoreFailure
from src.image_upload.schemas.upload import UploadRequest, UploadResult
from src.image_upload.services.storage_service import ObjectStore

logger = logging.getLogger(__name__)


def current_unix_millis() -> int:
    return time.time_ns() // 1_000_000


def generate_storage_key(original_name: str, millis: int) -> str:
    """``images/<millis>_<original_name>``; the name is kept verbatim."""
    return f"{STORAGE_KEY_PREFIX}{millis}_{original_name}"


def build_public_url(bucket_name: str, storage_key: str) -> str:
    return f"{PUBLIC_URL_BASE}/{bucket_name}/{storage_key}"


class UploadHandler:
    """Stores one image per call through an injected ``ObjectStore``."""

    def __init__(self, store: ObjectStore) -> None:
        self._store = store

    @property
    def store(self) -> ObjectStore:
        return self._store

    def handle(self, request: UploadRequest | None) -> UploadResult:
        if request is None:
            raise MissingFile()

        storage_key = generate_storage_key(request.original_name, current_unix_millis())

        try:
            self._store.save(storage_key, request.content, request.mime_type)
        except Exception as exc:
            raise StoreFailure(str(exc)) from exc

        try:
            self._store.make_public(storage_key)
        except Exception as exc:
            self._discard(storage_key)
            raise StoreFailure(str(exc)) from exc

        result = UploadResult(
            storage_key=storage_key,
            public_url=build_public_url(self._store.bucket_name, storage_key),
            size_bytes=request.size_bytes,
            mime_type=request.mime_type,
        )
        logger.info("✅ Image uploaded: %s", storage_key)
        return result

    def _discard(self, storage_key: str) -> None:
        """Delete an object that was saved but could not be made public."""
        try:
            self._store.delete(storage_key)
            logger.info("🗑️  Removed unpublished object: %s", storage_key)
        except Exception as exc:
            logger.warning("Failed to remove unpublished object %s: %s", storage_key, exc)
