"""Configuration models for AddonHub."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = Field(default="", description="postgresql:// or sqlite:// URL; empty uses ADDONHUB_DATABASE_URL.")
    tenant_id: str = Field(default="default", min_length=1, max_length=64)


class ArchiveConfig(BaseModel):
    """Archive storage configuration."""

    root: Path = Field(default=Path("data/repo-archive"), description="Directory archive paths are relative to.")
    format: str = Field(default="zip")


class IndexConfig(BaseModel):
    """Add-on index rendering configuration."""

    addon_header: str = Field(default="supertux-addoninfo")
    dependency_header: str = Field(default="dependency")
    index_header: str = Field(default="supertux-addons")
    default_page_size: int = Field(default=50, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    excluded_owners: list[str] = Field(default_factory=lambda: ["supertux"])


class DependencyConfig(BaseModel):
    """Dependency resolution limits."""

    max_depth: int = Field(default=8, ge=0, le=64)


class AddonHubConfig(BaseSettings):
    """Root configuration model for AddonHub."""

    public_url: str = Field(default="http://localhost:3000/", description="Public base URL of the hosting site.")
    operation_timeout_seconds: float = Field(default=120.0, gt=0)
    log_level: str = Field(default="INFO")
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    dependencies: DependencyConfig = Field(default_factory=DependencyConfig)

    model_config = SettingsConfigDict(
        env_prefix="ADDONHUB_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @field_validator("public_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        return value if value.endswith("/") else value + "/"
