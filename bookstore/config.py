"""
Application Configuration Module

Settings are loaded with Pydantic Settings from environment variables,
falling back to a ``.env`` file in the working directory.

The database is described by the ``DB_*`` variables:

    DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME, DB_SSLMODE

A full ``DATABASE_URL`` may be given instead; it wins over the ``DB_*``
composition (handy for SQLite during local development and tests).

Usage:
    from bookstore.config import get_settings

    settings = get_settings()
    print(settings.sqlalchemy_url)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# libpq accepts exactly these values for sslmode
SSL_MODES = {"disable", "allow", "prefer", "require", "verify-ca", "verify-full"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Invalid values raise a ValidationError when the settings are built,
    so a misconfigured process fails at startup instead of on first use.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Bookstore API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Echo SQL and expose internal error text in responses"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=8080,
        description="Port to bind the server to"
    )
    api_prefix: str = Field(
        default="/api",
        description="URL prefix shared by all book routes"
    )
    legacy_status_codes: bool = Field(
        default=True,
        description=(
            "Keep the historical status codes (500 for an empty id, 400 for "
            "any database failure). When false: 400 for an empty id, 404 for "
            "a missing book, 500 for database failures."
        )
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    db_host: str = Field(default="localhost", description="Database host")
    db_port: int = Field(default=5432, description="Database port")
    db_user: str = Field(default="postgres", description="Database user")
    db_password: str = Field(default="", description="Database password")
    db_name: str = Field(default="postgres", description="Database name")
    db_sslmode: str = Field(
        default="disable",
        description="libpq sslmode (disable, allow, prefer, require, verify-ca, verify-full)"
    )
    database_url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the DB_* settings when set"
    )
    db_pool_size: int = Field(
        default=5,
        description="Number of permanent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum additional connections during high load"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def sqlalchemy_url(self) -> str:
        """
        Connection URL handed to ``create_engine``.

        Returns ``database_url`` verbatim when it is set, otherwise a
        ``postgresql+psycopg2`` URL assembled from the ``DB_*`` settings
        with ``sslmode`` passed as a query parameter.
        """
        if self.database_url:
            return self.database_url

        url = URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
            query={"sslmode": self.db_sslmode},
        )
        return url.render_as_string(hide_password=False)

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a standard logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("db_sslmode")
    @classmethod
    def validate_sslmode(cls, v: str) -> str:
        if v.lower() not in SSL_MODES:
            raise ValueError(f"db_sslmode must be one of {sorted(SSL_MODES)}")
        return v.lower()

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Ensure the prefix starts with a slash and has no trailing slash."""
        v = "/" + v.strip("/")
        return "" if v == "/" else v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The first call reads the environment and ``.env``; later calls return
    the same instance. Tests that need different values should build a
    ``Settings`` directly and pass it to ``create_app``.
    """
    return Settings()
