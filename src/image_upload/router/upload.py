"""Router – image upload to Cloud Storage."""

from fastapi import APIRouter, Depends, File, Request, UploadFile
from starlette.concurrency import run_in_threadpool

from src.image_upload.config import Settings
from src.image_upload.errors import TooLarge, UnsupportedType
from src.image_upload.schemas.upload import ErrorResponse, UploadRequest, UploadResponse
from src.image_upload.services.upload_service import UploadHandler

router = APIRouter(tags=["Upload"])


def get_upload_handler(request: Request) -> UploadHandler:
    """Return the handler built at startup (see ``main.lifespan``)."""
    return request.app.state.upload_handler


async def read_upload(
    request: Request,
    image: UploadFile | None = File(default=None),
) -> UploadRequest | None:
    """
    Turn the multipart ``image`` field into an ``UploadRequest``.

    Non-image content types are rejected before the body is read, and the
    read is capped one byte past ``max_upload_size`` so an oversized
    file is never loaded into memory in full.
    """
    if image is None:
        return None

    settings: Settings = request.app.state.settings

    mime_type = image.content_type or ""
    if not mime_type.startswith(settings.allowed_mime_prefix):
        raise UnsupportedType(mime_type)

    content = await image.read(settings.max_upload_size + 1)
    if len(content) > settings.max_upload_size:
        raise TooLarge(settings.max_upload_size)

    return UploadRequest(
        original_name=image.filename or "",
        mime_type=mime_type,
        size_bytes=len(content),
        content=content,
    )


@router.post(
    "/upload-image",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_image(
    upload: UploadRequest | None = Depends(read_upload),
    handler: UploadHandler = Depends(get_upload_handler),
) -> UploadResponse:
    """
    Upload a single image and return its public URL.

    Parameters
    ----------
    image : multipart file field, any ``image/*`` type up to 5 MB.

    Returns
    -------
    UploadResponse with:
        - fileName  : storage key inside the bucket
        - publicUrl : public URL of the stored object
        - size      : file size in bytes
        - mimetype  : content type the object was stored with
    """
    # the GCS client blocks; keep it off the event loop
    result = await run_in_threadpool(handler.handle, upload)
    return UploadResponse.from_result(result)
