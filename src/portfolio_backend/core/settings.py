"""Application settings and configuration.

This module defines all configuration options for the portfolio backend.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    Relative paths are resolved against the working directory.
    """

    # Application metadata
    app_name: str = Field(default="Portfolio Backend", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Contact store
    db_path: Path = Field(default=Path("data/database/contacts.sqlite"), alias="DB_PATH")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Audit log files
    log_dir: Path = Field(default=Path("data/logs"), alias="LOG_DIR")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")
    anonymize_ips: bool = Field(default=False, alias="ANONYMIZE_IPS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Contact form throttling
    contact_rate_limit_max: int = Field(default=5, alias="CONTACT_RATE_LIMIT_MAX")
    contact_rate_limit_window_seconds: int = Field(
        default=60 * 60,
        alias="CONTACT_RATE_LIMIT_WINDOW_SECONDS",
    )
    rate_limit_sweep_interval_seconds: float = Field(
        default=10 * 60,
        alias="RATE_LIMIT_SWEEP_INTERVAL_SECONDS",
    )
    duplicate_window_seconds: int = Field(default=60 * 60, alias="DUPLICATE_WINDOW_SECONDS")

    # Access log filtering (API calls and build assets are never page visits)
    access_log_skip_prefixes: list[str] = Field(
        default=["/api/", "/_nuxt/"],
        alias="ACCESS_LOG_SKIP_PREFIXES",
    )

    # CORS configuration for the portfolio frontend
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL, falling back to the SQLite file at ``db_path``.

        Returns:
            The active SQLAlchemy database URL
        """
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.resolved_db_path}"

    @property
    def resolved_db_path(self) -> Path:
        """Absolute location of the SQLite contact store."""
        return self.db_path.expanduser().resolve()

    @property
    def resolved_log_dir(self) -> Path:
        """Absolute location of the audit log directory."""
        return self.log_dir.expanduser().resolve()


settings = Settings()
