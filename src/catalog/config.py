"""Service configuration using Pydantic Settings.

Values come from ``CATALOG_*`` environment variables or a local ``.env``
file, with defaults suitable for running from the project directory.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog import __version__
from catalog.domain.model.product import DEFAULT_CATEGORY


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Storage
    # =========================================================================
    data_file: Path = Field(
        default=Path("data") / "products.json",
        description="Path of the catalog JSON document",
    )
    default_category: str = Field(
        default=DEFAULT_CATEGORY,
        description="Category given to products created without one",
    )
    strict_storage: bool = Field(
        default=False,
        description="Raise on unreadable or unwritable storage instead of degrading",
    )

    # =========================================================================
    # HTTP
    # =========================================================================
    host: str = Field(default="0.0.0.0", description="Bind address for `catalog serve`")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )
    version: str = Field(default=__version__, description="Version reported by health checks")

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Output logs as JSON lines",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
