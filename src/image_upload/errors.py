"""Upload error taxonomy.

Client-input errors (``MissingFile``, ``UnsupportedType``, ``TooLarge``) map
to HTTP 400; ``StoreFailure`` maps to HTTP 500 and carries the provider
message.
"""

from __future__ import annotations

from src.image_upload.schemas.upload import ErrorResponse


def format_size(num_bytes: int) -> str:
    """Render a byte limit the way users read it: ``5MB``, ``512KB`` or ``1000 bytes``."""
    if num_bytes and num_bytes % (1024 * 1024) == 0:
        return f"{num_bytes // (1024 * 1024)}MB"
    if num_bytes and num_bytes % 1024 == 0:
        return f"{num_bytes // 1024}KB"
    return f"{num_bytes} bytes"


class UploadError(Exception):
    """Base class for every error the upload endpoint reports to the caller."""

    status_code: int = 500

    def __init__(self, error: str, message: str | None = None) -> None:
        super().__init__(message or error)
        self.error = error
        self.message = message

    @property
    def reason(self) -> str:
        """Server-side description used when the error is logged."""
        return self.error

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.error, message=self.message)


class MissingFile(UploadError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("No image file provided")


class UnsupportedType(UploadError):
    status_code = 400

    def __init__(self, mime_type: str | None = None) -> None:
        super().__init__("Only image files are allowed")
        self.mime_type = mime_type

    @property
    def reason(self) -> str:
        return f"{self.error} (got {self.mime_type or 'no content type'!r})"


class TooLarge(UploadError):
    status_code = 400

    def __init__(self, limit_bytes: int = 5 * 1024 * 1024) -> None:
        super().__init__(f"File too large. Maximum size is {format_size(limit_bytes)}.")
        self.limit_bytes = limit_bytes


class StoreFailure(UploadError):
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__("Failed to upload image", detail)
