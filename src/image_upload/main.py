"""Image Upload API – FastAPI application entry-point."""

from contextlib import asynccontextmanager
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from src.image_upload.config import Settings, settings
from src.image_upload.errors import MissingFile, UploadError
from src.image_upload.router import health, upload
from src.image_upload.schemas.upload import ErrorResponse
from src.image_upload.services.storage_service import ObjectStore, build_object_store
from src.image_upload.services.upload_service import UploadHandler

# Configure logging from settings
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Error handlers
# ──────────────────────────────────────────────
def register_error_handlers(app: FastAPI) -> None:
    """Map upload errors and anything unexpected onto the JSON error body."""

    @app.exception_handler(UploadError)
    async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Upload error: %s", exc, exc_info=exc)
        else:
            logger.warning("Rejected upload: %s | path=%s", exc.reason, request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response().model_dump(exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # a text part named "image" carries no file
        if any(tuple(err.get("loc", ())) == ("body", "image") for err in exc.errors()):
            return await upload_error_handler(request, MissingFile())
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception | path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(exc)).model_dump(exclude_none=True),
        )


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
def create_app(
    object_store: ObjectStore | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """
    Build the API.

    The object store is created at startup from *app_settings* unless one is
    passed in, and the resulting ``UploadHandler`` lives on ``app.state``.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store = object_store if object_store is not None else build_object_store(app_settings)
        app.state.upload_handler = UploadHandler(store)
        logger.info("🚀 Upload handler ready (bucket '%s')", store.bucket_name)
        yield
        logger.info("🛑 Shutting down")

    app = FastAPI(
        title="Image Upload API",
        description="Upload images to Google Cloud Storage and get a public URL back.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # ── CORS middleware (configured from environment variables) ──
    app.add_middleware(
        middleware_class=CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_methods_list,
        allow_headers=app_settings.cors_headers_list,
    )

    register_error_handlers(app)

    # ── register routers ──
    app.get('/')(lambda: {"message": "Image Upload API. POST an image to /upload-image (field 'image')."})
    app.include_router(health.router)
    app.include_router(upload.router)

    return app


app = create_app()
