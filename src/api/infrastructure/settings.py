"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        WORKSHOP_DB_HOST: Database host (default: localhost)
        WORKSHOP_DB_PORT: Database port (default: 5432)
        WORKSHOP_DB_DATABASE: Database name (default: workshop)
        WORKSHOP_DB_USERNAME: Database user (default: workshop)
        WORKSHOP_DB_PASSWORD: Database password (required in production)
        WORKSHOP_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        WORKSHOP_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        WORKSHOP_DB_ECHO_SQL: Log every SQL statement (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKSHOP_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="workshop", description="Database name")
    username: str = Field(default="workshop", description="Database username")
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

    echo_sql: bool = Field(default=False, description="Log SQL statements")

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


class QuotaSettings(BaseSettings):
    """Default per-tenant resource limits.

    Applied when a tenant's limits record is created lazily on first access,
    and for any field left unspecified when an administrator creates one.

    Environment variables:
        WORKSHOP_QUOTA_DEFAULT_MAX_VEHICLES: (default: 100)
        WORKSHOP_QUOTA_DEFAULT_MAX_FLEETS: (default: 50)
        WORKSHOP_QUOTA_DEFAULT_MAX_CUSTOMERS: (default: 200)
        WORKSHOP_QUOTA_DEFAULT_MAX_MONTHLY_INVOICES: (default: unset, no limit)
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKSHOP_QUOTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_max_vehicles: int = Field(default=100, gt=0)
    default_max_fleets: int = Field(default=50, gt=0)
    default_max_customers: int = Field(default=200, gt=0)
    default_max_monthly_invoices: int | None = Field(default=None, gt=0)


class TenancySettings(BaseSettings):
    """Tenant context resolution settings.

    Environment variables:
        WORKSHOP_TENANCY_REVALIDATE_ACTIVE_TENANT: Re-check membership of an
            already-selected tenant on every request (default: false)
        WORKSHOP_TENANCY_SESSION_COOKIE_NAME: Cookie carrying the session token
            (default: workshop.session_token)
        WORKSHOP_TENANCY_ADMIN_USER_IDS: JSON list of user ids allowed to use
            the administrative limits endpoints (default: none)
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKSHOP_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    revalidate_active_tenant: bool = Field(
        default=False,
        description="Re-validate membership of an already-set active tenant",
    )
    session_cookie_name: str = Field(
        default="workshop.session_token",
        description="Name of the cookie carrying the session token",
    )
    admin_user_ids: list[str] = Field(
        default_factory=list,
        description="Users allowed to read and change any tenant's limits",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Workshop API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def quota(self) -> QuotaSettings:
        """Get quota settings."""
        return get_quota_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
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
def get_quota_settings() -> QuotaSettings:
    """Get cached quota settings."""
    return QuotaSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()
