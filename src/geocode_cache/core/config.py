"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
Credentials are validated lazily: a missing Google API key only fails the
requests that reach the upstream provider.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Cache
    cache_backend: Literal["dynamodb", "database", "memory"] = Field(
        default="dynamodb",
        description="Lookup store backend",
    )
    cache_ttl_days: int = Field(
        default=30,
        description="Days before a cached response is considered stale",
        gt=0,
    )
    single_flight_enabled: bool = Field(
        default=False,
        description="Share one upstream fetch among concurrent misses for the same address",
    )

    # DynamoDB
    dynamodb_table_name: str = Field(
        default="GeocodeCache",
        description="DynamoDB table holding cached responses",
    )
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region for the DynamoDB client",
    )
    dynamodb_endpoint_url: str | None = Field(
        default=None,
        description="Optional DynamoDB endpoint override (e.g. DynamoDB Local)",
    )

    # Database
    database_url: str | None = Field(
        default=None,
        description="Async SQLAlchemy connection string (required for the database backend)",
    )

    # Upstream — Google Maps
    google_api_key: str | None = Field(
        default=None,
        description="Google Maps Geocoding API key",
    )
    google_timeout: float = Field(
        default=10.0,
        description="Google Maps request timeout in seconds",
        gt=0,
    )
    upstream_max_attempts: int = Field(
        default=1,
        description="Attempts per upstream fetch (1 disables retries)",
        ge=1,
        le=10,
    )
    upstream_retry_base_delay: float = Field(
        default=0.5,
        description="Base delay in seconds for exponential retry backoff",
        ge=0,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
