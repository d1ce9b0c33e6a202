"""
Blog API — Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; never reconfigured at runtime.

Environment variables:
    DATABASE_URL       MongoDB connection string for the running service
    TEST_DATABASE_URL  Separate MongoDB database used by the integration suite
    PORT               HTTP listen port
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults that point at a local development MongoDB,
    so the service starts without any configuration.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host[:port]/<database>
    # The path component names the database; database_name is used when it is absent
    database_url: str = Field(
        default="mongodb://localhost/blogs-api",
        description="MongoDB connection URL for the service",
    )

    test_database_url: str = Field(
        default="mongodb://localhost/test-blogs-api",
        description="MongoDB connection URL used by the integration test suite",
    )

    database_name: str = Field(
        default="blogs-api",
        description="Database name used when the connection URL carries none",
    )

    # How long the driver waits to find a reachable server before failing a call
    mongo_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, or "*" for any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
        "extra": "ignore",
    }


# Configuration is immutable after startup
settings = Settings()
