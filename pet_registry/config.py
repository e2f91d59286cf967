"""Application configuration using Pydantic Settings."""

import os
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SUPPORTED_DATABASE_DRIVERS = ("postgresql+asyncpg://", "sqlite+aiosqlite://")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str = Field(
        ...,
        description="Database URL with an async driver (asyncpg or aiosqlite)"
    )

    # Authentication Configuration
    secret_key: str = Field(
        ...,
        min_length=32,
        description="Secret key for JWT token generation"
    )
    jwt_lifetime_seconds: int = Field(
        default=3600,
        ge=300,
        le=86400,
        description="JWT token lifetime in seconds (5 min to 24 hours)"
    )
    auth_rate_limit_requests: int = Field(
        default=5,
        ge=1,
        description="Register/login attempts allowed per client IP in the window"
    )
    auth_rate_limit_window_seconds: int = Field(
        default=300,
        ge=1,
        description="Rate limit window for register/login in seconds"
    )

    # Pet Configuration
    strict_pet_ownership: bool = Field(
        default=True,
        description=(
            "Scope pet updates to the caller's active pets. When disabled, "
            "an update loads the target by id alone, whatever its owner or status."
        )
    )

    # Application Configuration
    app_name: str = Field(
        default="Pet Registry API",
        description="Application name"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level"
    )
    allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed CORS origins"
    )

    # Server Configuration
    host: str = Field(
        default="0.0.0.0",
        description="Server host"
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port"
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("TESTING") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate that database URL uses an async driver."""
        if not v.startswith(SUPPORTED_DATABASE_DRIVERS):
            raise ValueError(
                "DATABASE_URL must use an async driver "
                "(postgresql+asyncpg:// or sqlite+aiosqlite://)"
            )
        return v

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Validate that secret key is sufficiently long."""
        if len(v) < 32:
            raise ValueError(
                "SECRET_KEY must be at least 32 characters long for security"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def get_allowed_origins_list(self) -> List[str]:
        """Parse allowed origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")
