"""Settings for titanic-insights.

Values come from environment variables (case-insensitive) or a .env
file and are validated when Settings is constructed.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Store selection, manifest import, query and logging options."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Passenger store configuration
    store_backend: Literal["sqlite", "postgresql"] = Field(
        default="sqlite",
        description="Passenger store backend type",
    )
    store_sqlite_path: str = Field(
        default="./data/passengers.db",
        description="SQLite database file path",
    )
    database_url: str = Field(
        default="",
        description="PostgreSQL connection URL",
    )
    store_pool_size: int = Field(
        default=5,
        description="Maximum number of pooled store connections",
    )

    # Manifest import
    dataset_csv_path: str = Field(
        default="./data/train.csv",
        description="Path to the Titanic manifest CSV (Kaggle train.csv layout)",
    )
    seed_on_startup: bool = Field(
        default=True,
        description="Import the manifest CSV when the store is empty",
    )

    # Query behaviour
    missing_age_policy: Literal["first", "last", "exclude"] = Field(
        default="last",
        description="Placement of passengers without an age when ordering by age",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    @field_validator("store_sqlite_path")
    @classmethod
    def validate_sqlite_path(cls, v: str) -> str:
        """Ensure the SQLite path is not blank."""
        if not v.strip():
            raise ValueError("store_sqlite_path must be a non-empty path")
        return v

    @field_validator("store_pool_size")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        """Ensure pool size is positive."""
        if v <= 0:
            raise ValueError("store_pool_size must be positive")
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Accept only PostgreSQL URLs when a URL is given."""
        if v and not v.startswith(("postgresql://", "postgres://")):
            raise ValueError(
                "database_url must start with postgresql:// or postgres://"
            )
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Build Settings, reading env_file instead of ./.env when given.

    Raises:
        pydantic.ValidationError: If any value is rejected.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
