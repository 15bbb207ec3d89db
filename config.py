"""
Configuration for Image Translation Studio.

Settings are grouped into sections and populated from environment variables
(a local .env file is loaded first). Use get_settings() to obtain the cached
instance.
"""

import os
from functools import lru_cache
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from core.constants import DownloadConstants, GeminiConstants, ImageConstants
from core.enums import OutputFormat, Resolution


class SystemSettings(BaseModel):
    """Process-wide settings"""

    log_level: str = "INFO"
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value


class APISettings(BaseModel):
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class ImageSettings(BaseModel):
    """Uploaded image store limits"""

    max_images: int = Field(ImageConstants.DEFAULT_MAX_IMAGES, ge=1)
    max_memory_mb: int = Field(ImageConstants.DEFAULT_MAX_MEMORY_MB, ge=1)
    thumbnail_width: int = Field(ImageConstants.DEFAULT_THUMBNAIL_WIDTH, ge=16)


class GeminiSettings(BaseModel):
    """Remote image generation service"""

    api_key: Optional[str] = None
    model: str = GeminiConstants.DEFAULT_MODEL


class OutputDefaults(BaseModel):
    """Initial output settings of a new session"""

    prefix: str = "translated_"
    suffix: str = ""
    format: OutputFormat = OutputFormat.PNG
    quality: int = Field(90, ge=1, le=100)
    resolution: Resolution = Resolution.ORIGINAL


class DownloadSettings(BaseModel):
    stagger_ms: int = Field(DownloadConstants.DEFAULT_STAGGER_MS, ge=0)


class Settings(BaseModel):
    """Root settings object"""

    environment: str = "development"
    system: SystemSettings = Field(default_factory=SystemSettings)
    api: APISettings = Field(default_factory=APISettings)
    image: ImageSettings = Field(default_factory=ImageSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    output: OutputDefaults = Field(default_factory=OutputDefaults)
    download: DownloadSettings = Field(default_factory=DownloadSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Dump settings for app.state, with secrets redacted."""
        data = self.model_dump(mode="json")
        if data["gemini"].get("api_key"):
            data["gemini"]["api_key"] = "***"
        return data


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


def load_settings() -> Settings:
    """Build settings from the environment (after loading .env)."""
    load_dotenv()

    return Settings(
        environment=os.getenv("APP_ENV", "development"),
        system=SystemSettings(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            debug=_env_bool("DEBUG", False),
        ),
        api=APISettings(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("API_PORT", "8000")),
            cors_enabled=_env_bool("CORS_ENABLED", True),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
        ),
        image=ImageSettings(
            max_images=int(os.getenv("MAX_IMAGES", str(ImageConstants.DEFAULT_MAX_IMAGES))),
            max_memory_mb=int(
                os.getenv("MAX_IMAGE_MEMORY_MB", str(ImageConstants.DEFAULT_MAX_MEMORY_MB))
            ),
            thumbnail_width=int(
                os.getenv("THUMBNAIL_WIDTH", str(ImageConstants.DEFAULT_THUMBNAIL_WIDTH))
            ),
        ),
        gemini=GeminiSettings(
            api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
            model=os.getenv("GEMINI_MODEL", GeminiConstants.DEFAULT_MODEL),
        ),
        output=OutputDefaults(
            prefix=os.getenv("OUTPUT_PREFIX", "translated_"),
            suffix=os.getenv("OUTPUT_SUFFIX", ""),
            format=OutputFormat(os.getenv("OUTPUT_FORMAT", OutputFormat.PNG.value)),
            quality=int(os.getenv("OUTPUT_QUALITY", "90")),
            resolution=Resolution(os.getenv("OUTPUT_RESOLUTION", Resolution.ORIGINAL.value)),
        ),
        download=DownloadSettings(
            stagger_ms=int(
                os.getenv("DOWNLOAD_STAGGER_MS", str(DownloadConstants.DEFAULT_STAGGER_MS))
            ),
        ),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return load_settings()
