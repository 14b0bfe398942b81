"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        GARAGEDESK_DB_HOST: Database host (default: localhost)
        GARAGEDESK_DB_PORT: Database port (default: 5432)
        GARAGEDESK_DB_DATABASE: Database name (default: garagedesk)
        GARAGEDESK_DB_USERNAME: Database user (default: garagedesk)
        GARAGEDESK_DB_PASSWORD: Database password (required in production)
        GARAGEDESK_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        GARAGEDESK_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="GARAGEDESK_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="garagedesk", description="Database name")
    username: str = Field(default="garagedesk", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class TenancySettings(BaseSettings):
    """Tenant resolution settings.

    Environment variables:
        GARAGEDESK_TENANCY_CALL_TIMEOUT_SECONDS: Upper bound for every store
            call made while resolving a tenant (default: 10)
        GARAGEDESK_TENANCY_LOCAL_HOSTNAMES: Loopback host names used for
            local development (default: ["localhost", "127.0.0.1"])
        GARAGEDESK_TENANCY_DEFAULT_TENANT_SLUG: Garage that staff users
            without an assignment fall back to (default: unset)
        GARAGEDESK_TENANCY_SESSION_COOKIE_NAME: Cookie holding the session
            credential, cleared when a user is signed out
            (default: garagedesk_session)
    """

    model_config = SettingsConfigDict(
        env_prefix="GARAGEDESK_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    call_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to each store call",
        gt=0,
        le=120,
    )
    local_hostnames: list[str] = Field(
        default_factory=lambda: ["localhost", "127.0.0.1"],
        description="Host names treated as local development",
    )
    default_tenant_slug: str | None = Field(
        default=None,
        description="Fallback garage slug for staff users",
    )
    session_cookie_name: str = Field(
        default="garagedesk_session",
        description="Session cookie cleared on forced sign-out",
        min_length=1,
    )

    @field_validator("local_hostnames")
    @classmethod
    def normalize_local_hostnames(cls, value: list[str]) -> list[str]:
        """Lower-case and strip configured host names."""
        return [name.strip().lower() for name in value if name.strip()]

    @field_validator("default_tenant_slug")
    @classmethod
    def blank_slug_is_unset(cls, value: str | None) -> str | None:
        """Treat an empty slug as not configured."""
        if value is None or not value.strip():
            return None
        return value.strip()


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="GARAGEDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="GarageDesk API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenant resolution settings."""
        return get_tenancy_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenant resolution settings."""
    return TenancySettings()
