"""Router – health check."""

from fastapi import APIRouter, Depends

from src.image_upload.router.upload import get_upload_handler
from src.image_upload.services.upload_service import UploadHandler

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(handler: UploadHandler = Depends(get_upload_handler)) -> dict:
    """Liveness probe; also reports the bucket uploads go to."""
    return {"status": "ok", "bucket": handler.store.bucket_name}
