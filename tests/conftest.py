from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from src.image_upload.config import Settings
from src.image_upload.main import create_app
from src.image_upload.services.storage_service import ObjectStore

BUCKET = "test-bucket"


class FakeObjectStore(ObjectStore):
    """In-memory store that records every call made against it."""

    def __init__(self, bucket_name: str = BUCKET) -> None:
        self._bucket_name = bucket_name
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.public: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self.save_error: Exception | None = None
        self.publish_error: Exception | None = None
        self.delete_error: Exception | None = None

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    def save(self, key: str, data: bytes, content_type: str) -> None:
        self.calls.append(("save", key))
        if self.save_error is not None:
            raise self.save_error
        if key in self.objects:
            raise RuntimeError(f"Object {key} already exists")
        self.objects[key] = (data, content_type)

    def make_public(self, key: str) -> None:
        self.calls.append(("make_public", key))
        if self.publish_error is not None:
            raise self.publish_error
        self.public.add(key)

    def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        if self.delete_error is not None:
            raise self.delete_error
        self.objects.pop(key, None)


@pytest.fixture
def store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def client(store: FakeObjectStore) -> Iterator[TestClient]:
    app = create_app(object_store=store, app_settings=Settings(_env_file=None))
    with TestClient(app) as test_client:
        yield test_client
