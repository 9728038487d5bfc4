"""Application settings using Pydantic Settings for environment-based configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_list(value: str) -> set[str]:
    """Parse a comma-separated env value, dropping blanks."""
    return {item.strip() for item in value.split(",") if item.strip()}


class Settings(BaseSettings):
    """
    Central configuration for the almanac-events application.

    All settings can be overridden via environment variables.
    Prefix is not used to allow standard env var names (e.g., LOG_LEVEL).
    Extractor tuning lives in EventExtractionConfig (EVENTS_ prefix).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 8001
    api_keys: str | None = None  # Comma-separated; unset disables auth
    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    cors_allow_credentials: bool = False

    # Uploads
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    allowed_extensions: str = ".pdf,.txt"

    # Text acquisition
    min_text_length: int = Field(default=100, ge=0)

    # Output files
    output_dir: str = "extracted-events"
    save_outputs: bool = True

    # Deadline for one upload-and-extract request; 0 disables it
    extraction_timeout_seconds: float = Field(default=60.0, ge=0.0)

    # Observability
    metrics_port: int = 8000

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def allowed_extension_set(self) -> set[str]:
        """Lower-cased, dot-prefixed file extensions accepted for upload."""
        return {
            ext if ext.startswith(".") else f".{ext}"
            for ext in _split_list(self.allowed_extensions.lower())
        }

    @property
    def api_key_set(self) -> set[str]:
        """Accepted X-API-KEY values; empty means auth is disabled."""
        return _split_list(self.api_keys or "")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    Clear cache with get_settings.cache_clear() if needed.
    """
    return Settings()
