from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Google Cloud Storage
    google_cloud_project_id: str | None = None
    service_account_key_path: str | None = None
    google_cloud_bucket_name: str | None = None

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS settings
    cors_origins: str = "*"
    cors_allow_credentials: bool = False
    cors_allow_methods: str = "GET,POST,OPTIONS"
    cors_allow_headers: str = "*"

    # Upload settings
    max_upload_size: int = 5 * 1024 * 1024  # 5 MB
    allowed_mime_prefix: str = "image/"

    # Application settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def cors_methods_list(self) -> list[str]:
        """Parse CORS methods from comma-separated string."""
        if self.cors_allow_methods == "*":
            return ["*"]
        return [method.strip() for method in self.cors_allow_methods.split(",")]

    @property
    def cors_headers_list(self) -> list[str]:
        """Parse CORS headers from comma-separated string."""
        if self.cors_allow_headers == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allow_headers.split(",")]


# Global settings instance
settings = Settings()

# ──────────────────────────────────────────────
# Storage layout
# ──────────────────────────────────────────────
STORAGE_KEY_PREFIX = "images/"
PUBLIC_URL_BASE = "https://storage.googleapis.com"
