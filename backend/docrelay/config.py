"""
DocRelay Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.

Required environment:
    MONGO_USER, MONGO_PASSWORD, MONGO_HOST, MONGO_DB

    They are composed into:
        mongodb://<user>:<password>@<host>:<port>/<db>?authSource=<db>
"""

from typing import List
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The MONGO_* credentials default to empty strings so the module can be
    imported (tests, tooling) without a database; `validate_required()`
    reports what is missing at startup.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    mongo_user: str = Field(default="", description="MongoDB user name")
    mongo_password: str = Field(default="", description="MongoDB password")
    mongo_host: str = Field(default="", description="MongoDB host name")
    mongo_db: str = Field(
        default="",
        description="Database name; also used as the authSource",
    )
    mongo_port: int = Field(default=27017, ge=1, le=65535)

    # All four data routes read and write this one collection
    mongo_collection: str = Field(default="test")

    # Driver timeouts (milliseconds). pymongo defaults, exposed for tuning.
    mongo_server_selection_timeout_ms: int = Field(default=30_000, ge=100)
    mongo_connect_timeout_ms: int = Field(default=20_000, ge=100)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGO_HOST and mongo_host both work
    }

    @property
    def mongo_uri(self) -> str:
        """
        Connection URI built from the MONGO_* settings.

        User and password are percent-escaped; pymongo rejects a raw
        '@', ':' or '/' in either.
        """
        return (
            f"mongodb://{quote_plus(self.mongo_user)}:{quote_plus(self.mongo_password)}"
            f"@{self.mongo_host}:{self.mongo_port}/{self.mongo_db}"
            f"?authSource={self.mongo_db}"
        )

    @property
    def mongo_uri_redacted(self) -> str:
        """Same as `mongo_uri` with the password masked, for log output."""
        return (
            f"mongodb://{quote_plus(self.mongo_user)}:***"
            f"@{self.mongo_host}:{self.mongo_port}/{self.mongo_db}"
            f"?authSource={self.mongo_db}"
        )

    def missing_required(self) -> List[str]:
        """Names of required MONGO_* variables that are unset or blank."""
        required = {
            "MONGO_USER": self.mongo_user,
            "MONGO_PASSWORD": self.mongo_password,
            "MONGO_HOST": self.mongo_host,
            "MONGO_DB": self.mongo_db,
        }
        return [name for name, value in required.items() if not value.strip()]

    def validate_required(self) -> None:
        """
        What:  Validates that the MongoDB credentials are configured.
        When:  Called during app startup (lifespan).
        How:   Raises ValueError listing every missing variable.
        """
        missing = self.missing_required()
        if missing:
            raise ValueError(
                "Configuration validation failed:\n"
                + "\n".join(f"  - {name} is not set" for name in missing)
            )


# Singleton instance — imported throughout the application
settings = Settings()
