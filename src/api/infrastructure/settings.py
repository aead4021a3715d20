"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        HUDDLE_DB_HOST: Database host (default: localhost)
        HUDDLE_DB_PORT: Database port (default: 5432)
        HUDDLE_DB_DATABASE: Database name (default: huddle)
        HUDDLE_DB_USERNAME: Database user (default: huddle)
        HUDDLE_DB_PASSWORD: Database password (required in production)
        HUDDLE_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        HUDDLE_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="HUDDLE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="huddle", description="Database name")
    username: str = Field(default="huddle", description="Database username")
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


class AuthSettings(BaseSettings):
    """Settings for verifying access tokens issued by the hosted auth provider.

    Environment variables:
        HUDDLE_AUTH_JWT_SECRET: Shared HMAC secret used to sign access tokens
        HUDDLE_AUTH_AUDIENCE: Expected audience claim (default: authenticated)
        HUDDLE_AUTH_ISSUER: Expected issuer claim (optional, unchecked if unset)
        HUDDLE_AUTH_ALGORITHMS: Accepted signing algorithms (default: ["HS256"])
    """

    model_config = SettingsConfigDict(
        env_prefix="HUDDLE_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr = Field(
        default=SecretStr(""),
        description="HMAC secret for access token signatures",
    )
    audience: str = Field(
        default="authenticated",
        description="Expected audience claim",
    )
    issuer: str | None = Field(
        default=None,
        description="Expected issuer claim",
    )
    algorithms: list[str] = Field(
        default_factory=lambda: ["HS256"],
        description="Accepted JWT signing algorithms",
    )


class MembershipSettings(BaseSettings):
    """Settings for the membership bounded context.

    Environment variables:
        HUDDLE_MEMBERSHIP_CLOSE_PARTICIPATION_AT_START: Reject joins once the
            event has started (default: false)
        HUDDLE_MEMBERSHIP_EVENT_TIMEZONE: IANA zone in which event start
            times are scheduled (default: UTC)
    """

    model_config = SettingsConfigDict(
        env_prefix="HUDDLE_MEMBERSHIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    close_participation_at_start: bool = Field(
        default=False,
        description="Reject join requests after the event start time",
    )
    event_timezone: str = Field(
        default="UTC",
        description="IANA time zone of the naive event start times",
    )

    @field_validator("event_timezone")
    @classmethod
    def validate_event_timezone(cls, value: str) -> str:
        """Validate that the zone exists in the time zone database."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {value}") from e
        return value

    @property
    def event_zone(self) -> ZoneInfo:
        """The configured event time zone."""
        return ZoneInfo(self.event_timezone)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Huddle API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get auth settings."""
        return get_auth_settings()


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
def get_auth_settings() -> AuthSettings:
    """Get cached auth settings."""
    return AuthSettings()


@lru_cache
def get_membership_settings() -> MembershipSettings:
    """Get cached membership settings."""
    return MembershipSettings()
