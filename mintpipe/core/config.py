"""Application configuration."""

from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "mintpipe"
    version: str = "0.1.0"

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Content Store Settings
    CONTENT_STORE_BACKEND: Literal["pinata", "memory"] = "pinata"
    PINATA_API_KEY: str | None = None
    PINATA_API_SECRET: str | None = None
    PINATA_BASE_URL: str = "https://api.pinata.cloud"
    PINATA_TIMEOUT: float = Field(default=60.0, gt=0)

    # Upload Pipeline Settings
    UPLOAD_CONCURRENCY: int | None = Field(default=None, ge=1)  # None = unbounded
    UPLOAD_RETRIES: int = Field(default=0, ge=0)
    UPLOAD_BACKOFF_BASE: float = Field(default=0.5, ge=0)
    UPLOAD_BACKOFF_MAX: float = Field(default=8.0, ge=0)
    IMAGES_LOCATION: str = "./images"
    METADATA_DESCRIPTION: str = "Tobikage : Ninja Robots"

    # Randomness Coordinator Settings
    MINIMUM_STAKE: float = Field(default=0.01, ge=0)
    REQUEST_TIMEOUT_SECONDS: float = Field(default=300.0, gt=0)
    TIMEOUT_SWEEP_INTERVAL: float = Field(default=5.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @field_validator("PINATA_BASE_URL")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Require an absolute URL and drop any trailing slash."""
        if "://" not in value:
            raise ValueError(f"PINATA_BASE_URL must include a scheme, got: {value}")
        return value.rstrip("/")

    @model_validator(mode="after")
    def validate_backoff(self) -> "Settings":
        """Keep the backoff ceiling at or above the base delay."""
        if self.UPLOAD_BACKOFF_MAX < self.UPLOAD_BACKOFF_BASE:
            self.UPLOAD_BACKOFF_MAX = self.UPLOAD_BACKOFF_BASE
        return self

