"""Application configuration."""

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo

from pydantic import Field, PostgresDsn, RedisDsn, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Minimum entropy for secrets (measured by character diversity)
MIN_SECRET_UNIQUE_CHARS = 16


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Attendance Tracker API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Calendar dates ("today") are resolved in this timezone
    timezone: str = "Asia/Kathmandu"

    # Database (required - no default for security)
    database_url: PostgresDsn = Field(
        description="PostgreSQL connection URL. Must be set via environment variable."
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Redis (bot wizard state)
    redis_url: RedisDsn = Field(default="redis://localhost:6379")
    wizard_ttl_seconds: int = Field(default=900, ge=60, le=86400)

    # Security - JWT
    jwt_secret: str = Field(min_length=32)
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = 24

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    # Trusted proxies for rate limiting (comma-separated IP/CIDR ranges)
    trusted_proxies: str = ""

    # Rate limiting settings (requests per minute)
    rate_limit_enabled: bool = True
    rate_limit_default: int = 100
    rate_limit_auth_login: int = 5

    # Slack bot
    slack_bot_token: str = ""
    slack_signing_secret: str = ""

    # Discord bot
    discord_bot_token: str = ""
    discord_public_key: str = ""
    discord_guild_id: str = ""

    # Reminder jobs (crontab syntax, evaluated in `timezone`)
    reminders_enabled: bool = True
    checkin_reminder_cron: str = "55 9 * * sun,mon,tue,wed,thu,fri"
    checkout_reminder_cron: str = "55 16 * * sun,mon,tue,wed,thu,fri"

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject unknown IANA timezone names at startup."""
        try:
            ZoneInfo(v)
        except Exception as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for security requirements."""
        # Security: Prevent debug mode in production
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        url = str(self.database_url)
        if not url.startswith(("postgresql://", "postgres://")):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL starting with 'postgresql://' or 'postgres://'"
            )

        # In production, require SSL/TLS connection (unless connecting to Docker internal network)
        is_docker_internal = "@postgres:" in url or "@localhost:" in url or "@127.0.0.1:" in url
        if self.environment == "production" and not is_docker_internal and "sslmode=" not in url:
            raise ValueError(
                "DATABASE_URL must include sslmode parameter in production "
                "(e.g., sslmode=require or sslmode=verify-full)"
            )

        if self.environment == "production":
            if len(set(self.jwt_secret)) < MIN_SECRET_UNIQUE_CHARS:
                raise ValueError(
                    f"JWT_SECRET must contain at least {MIN_SECRET_UNIQUE_CHARS} unique characters "
                    "for sufficient entropy. Use a cryptographically random value."
                )

        return self

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy with asyncpg.

        Converts sslmode parameter to ssl for asyncpg compatibility.
        """
        url = str(self.database_url)
        url = url.replace("postgresql://", "postgresql+asyncpg://")
        url = url.replace("postgres://", "postgresql+asyncpg://")
        url = url.replace("sslmode=", "ssl=")
        return url

    @property
    def tzinfo(self) -> ZoneInfo:
        """Get the configured timezone."""
        return ZoneInfo(self.timezone)

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def trusted_proxies_list(self) -> list[str]:
        """Get trusted proxies as a list."""
        if not self.trusted_proxies:
            return []
        return [proxy.strip() for proxy in self.trusted_proxies.split(",") if proxy.strip()]

    @property
    def slack_enabled(self) -> bool:
        """Whether the Slack bot is configured."""
        return bool(self.slack_bot_token and self.slack_signing_secret)

    @property
    def discord_enabled(self) -> bool:
        """Whether the Discord bot is configured."""
        return bool(self.discord_bot_token and self.discord_public_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
