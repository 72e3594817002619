"""Configuration management for zplify."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from zplify.models.conversion import ConversionConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
# 2000x2000, wider than a 6 inch label at 300 dpi
DEFAULT_MAX_PIXELS = 4_000_000


class AppConfig(BaseModel):
    """Application configuration loaded from config.yaml."""

    # Defaults for conversions that don't override them
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    add_header_footer: bool = False
    max_upload_bytes: int = Field(default=DEFAULT_MAX_UPLOAD_BYTES, gt=0)
    # Uploads are rejected above this width * height before any pixel is decoded
    max_pixels: int = Field(default=DEFAULT_MAX_PIXELS, gt=0)
    # API key for external access (optional, if not set API is open)
    api_key: str | None = None


class Settings(BaseSettings):
    """Environment-based settings."""

    model_config = SettingsConfigDict(
        env_prefix="ZPLIFY_",
        env_file=".env",
        extra="ignore",
    )

    config_file: Path = Path("config.yaml")
    host: str = "0.0.0.0"
    port: int = 7980
    debug: bool = False


def load_config(config_path: Path) -> AppConfig:
    """Load application configuration from YAML file."""
    if not config_path.exists():
        logger.debug(f"Config file {config_path} not found, using defaults")
        return AppConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # YAML returns None for an empty "conversion:" key; a non-mapping root
    # is left for model_validate to reject
    if isinstance(data, dict) and data.get("conversion") is None:
        data.pop("conversion", None)

    return AppConfig.model_validate(data)


# Global settings instance
settings = Settings()
