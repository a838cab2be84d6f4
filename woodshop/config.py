"""Application configuration using Pydantic Settings.

Reads configuration from environment variables with sensible defaults.
Database credentials and the Supabase project URL should be provided via
environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    # =========================================================================
    # Database (hosted Postgres behind Supabase)
    # =========================================================================
    db_user: str = Field(
        default="postgres",
        description="Database user",
    )
    db_password: str = Field(
        default="",
        description="Database password",
    )
    db_name: str = Field(
        default="postgres",
        description="Database name",
    )
    db_host: str = Field(
        default="localhost",
        description="Database host",
    )
    db_port: int = Field(
        default=5432,
        description="Database port",
    )
    db_ssl: bool = Field(
        default=False,
        description="Require TLS for database connections (hosted Postgres)",
    )
    db_pool_size: int = Field(
        default=5,
        description="Database connection pool size",
    )
    db_pool_max_overflow: int = Field(
        default=10,
        description="Max overflow connections beyond pool size",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Build the asyncpg database URL."""
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================================================================
    # Object Storage
    # =========================================================================
    supabase_url: str = Field(
        default="http://localhost:54321",
        description="Supabase project URL",
    )
    storage_bucket: str = Field(
        default="products",
        description="Public storage bucket holding product images",
    )
    storage_public_base: str = Field(
        default="",
        description="Explicit public base URL for images (overrides supabase_url/bucket)",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def image_public_base(self) -> str:
        """Public URL prefix that relative image paths are resolved against."""
        if self.storage_public_base:
            return self.storage_public_base.rstrip("/")
        return (
            f"{self.supabase_url.rstrip('/')}/storage/v1/object/public/"
            f"{self.storage_bucket}"
        )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
