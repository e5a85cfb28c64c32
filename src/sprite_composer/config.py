# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to wiki endpoints, output paths, throttling and logging settings

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="SPRITE_COMPOSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Wiki endpoints
    wiki_base_url: str = Field(default="https://wiki.biligame.com", description="Base URL of the character wiki")
    list_path: str = Field(
        default="/xytx/%E8%A7%92%E8%89%B2%E5%9B%BE%E9%89%B4",
        description="Path of the character listing page, relative to wiki_base_url",
    )
    character_path_prefix: str = Field(
        default="/xytx/", description="Path prefix identifying character detail links on the listing page"
    )
    image_host: str = Field(
        default="https://patchwiki.biligame.com", description="Host used to resolve root-relative image references"
    )
    user_agent: str = Field(
        default="sprite-composer/0.1 (wiki sprite layer compositor)", description="User-Agent for wiki requests"
    )
    http_timeout: float = Field(default=30.0, description="HTTP timeout in seconds for page and image requests")

    # Output
    output_dir: Path = Field(default=Path("output"), description="Directory receiving one PNG per character")
    metadata_path: Path = Field(default=Path("characters.json"), description="JSON file for character metadata")

    # Throttling / scheduling
    request_delay: float = Field(
        default=0.2, ge=0.0, description="Fixed delay in seconds between successive detail-page fetches"
    )
    concurrency: int = Field(
        default=1, ge=1, description="Maximum number of characters composited at the same time (1 = sequential)"
    )
    max_canvas_dimension: int = Field(
        default=8192, ge=1, description="Largest canvas width or height in pixels; larger sprites are skipped"
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    @property
    def list_url(self) -> str:
        """Absolute URL of the character listing page."""
        return self.wiki_base_url.rstrip("/") + self.list_path


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
