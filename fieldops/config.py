"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldops.domain.errors import ConfigurationError

logger = logging.getLogger("config")

# Settings that must be provided through the environment; maps field -> env var
REQUIRED_SETTINGS: dict[str, str] = {
    "database_url": "DATABASE_URL",
    "supabase_url": "SUPABASE_URL",
    "supabase_anon_key": "SUPABASE_ANON_KEY",
    "supabase_service_role_key": "SUPABASE_SERVICE_ROLE_KEY",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    version: str = "0.1.0"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_url: str = Field(
        default="",
        description="PostgreSQL connection URL with asyncpg driver",
    )
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 10
    db_command_timeout_seconds: float = Field(
        default=8.0,
        description="Per-statement timeout handed to asyncpg",
    )
    db_operation_timeout_seconds: float = Field(
        default=8.0,
        description="Upper bound for a single user-directory operation",
    )

    # Identity provider (Supabase Auth)
    supabase_url: str = Field(default="", description="Identity provider base URL")
    supabase_anon_key: str = Field(default="", description="Public API key sent as `apikey`")
    supabase_service_role_key: str = Field(
        default="",
        description="Service-role key for admin user management (server-side only)",
    )
    identity_timeout_seconds: float = Field(
        default=8.0,
        description="Timeout for a single identity provider request",
    )
    identity_max_retries: int = Field(
        default=2,
        description="Extra attempts after a transient identity provider failure",
    )
    identity_retry_backoff_seconds: float = Field(
        default=0.2,
        description="Initial backoff between identity provider retries (doubles each attempt)",
    )

    # Observability
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    service_name: str = "fieldops-api"
    prometheus_enabled: bool = True

    # CORS
    cors_allow_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @computed_field
    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Parse cors_allow_origins into a list."""
        if not self.cors_allow_origins:
            return []
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    @property
    def identity_base_url(self) -> str:
        return self.supabase_url.rstrip("/")

    def missing_required(self) -> list[str]:
        """Return env var names of required settings that are empty."""
        return [
            env_name
            for field_name, env_name in REQUIRED_SETTINGS.items()
            if not str(getattr(self, field_name) or "").strip()
        ]

    def ensure_required(self) -> None:
        """Fail fast when required configuration is absent.

        Raises:
            ConfigurationError: Listing every missing environment variable
        """
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                message=(
                    "Missing required configuration: "
                    + ", ".join(missing)
                    + ". Set these environment variables (or add them to .env) before starting."
                ),
                details={"missing": missing},
            )

    def log_config_summary(self) -> None:
        """Log a summary of the configuration (redacting secrets)."""
        logger.info(
            "Configuration loaded",
            extra={
                "service": "config",
                "environment": self.environment,
                "database": self._redact_url(self.database_url),
                "identity_url": self.identity_base_url,
                "identity_timeout_seconds": self.identity_timeout_seconds,
                "identity_max_retries": self.identity_max_retries,
                "admin_api_configured": bool(self.supabase_service_role_key),
                "log_level": self.log_level,
            },
        )

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials from a database URL."""
        if "@" in url and "://" in url:
            protocol_end = url.index("://") + 3
            at_pos = url.rindex("@")
            return url[:protocol_end] + "***:***" + url[at_pos:]
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
