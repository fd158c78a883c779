from pydantic import BaseModel, ConfigDict, Field


class UploadRequest(BaseModel):
    """A parsed multipart file, owned by a single request."""
    original_name: str
    mime_type: str
    size_bytes: int
    content: bytes = Field(repr=False)


class UploadResult(BaseModel):
    """Outcome of a successful upload."""
    storage_key: str
    public_url: str
    size_bytes: int
    mime_type: str


class UploadResponse(BaseModel):
    """Response schema for POST /upload-image."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Image uploaded successfully"
    file_name: str = Field(alias="fileName")
    public_url: str = Field(alias="publicUrl")
    size: int
    mimetype: str

    @classmethod
    def from_result(cls, result: UploadResult) -> "UploadResponse":
        return cls(
            file_name=result.storage_key,
            public_url=result.public_url,
            size=result.size_bytes,
            mimetype=result.mime_type,
        )


class ErrorResponse(BaseModel):
    """Error body shared by every failing response."""
    success: bool = False
    error: str
    message: str | None = None
