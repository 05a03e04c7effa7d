"""Configuration settings for the redaction pipeline."""

from pathlib import Path
from typing import Optional, Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AUTOREDACT_", env_file=".env", env_file_encoding="utf-8"
    )

    # OCR settings
    ocr_language: str = "eng"
    tesseract_cmd: Optional[str] = None
    ocr_upscale: int = 2  # Rasters are upscaled before recognition

    # Document limits
    pdf_render_scale: float = 2.0
    pdf_max_size_mb: int = 10
    pdf_max_pages: int = 20

    # Redaction appearance
    redaction_padding: int = 2
    fill_color: Tuple[int, int, int] = (0, 0, 0)

    # Storage for persisted detection settings
    storage_dir: Path = Path.home() / ".autoredact"

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    @property
    def pdf_max_size_bytes(self) -> int:
        """Maximum PDF size in bytes."""
        return self.pdf_max_size_mb * 1024 * 1024


# Global settings instance
settings: Optional[Settings] = None


def load_settings() -> Settings:
    """Load settings from environment variables and .env file."""
    global settings
    settings = Settings()
    return settings


def get_settings() -> Settings:
    """Get the global settings instance, loading if necessary."""
    global settings
    if settings is None:
        settings = load_settings()
    return settings
