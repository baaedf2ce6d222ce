"""
User Records Service — Application Configuration
=================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; required values are checked
       during application startup (see main.lifespan).
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Everything except the MongoDB connection string has a development
    default. Attributes are grouped by concern.
    """

    # ── Document Store ────────────────────────────────────────────────────
    # What: MongoDB connection string, e.g. mongodb://localhost:27017
    # Required: read from MONGO_DB; startup aborts when it is empty
    mongo_db: str = Field(
        default="",
        description="MongoDB connection string",
    )

    # What: Database holding the users collection
    mongo_database: str = Field(default="test")

    # What: Collection every handler reads and writes
    users_collection: str = Field(default="users", min_length=1)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="127.0.0.1")
    backend_port: int = Field(default=8080, ge=1, le=65535)

    # What: Controls verbosity of application logging
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

    # ── Legacy Wire Behavior ──────────────────────────────────────────────
    # What: GET /users on an empty collection answers 404 instead of 200 []
    # Existing clients depend on this; set to false to return an empty array
    empty_list_not_found: bool = Field(default=True)

    # What: An update that modifies no document answers 500
    # When false: matched-but-unchanged → 200, matched nothing → 404
    noop_update_is_error: bool = Field(default=True)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGO_DB and mongo_db both work
        "extra": "ignore",
    }

    def validate_required(self) -> None:
        """
        What:  Validates that settings without a usable default are configured.
        When:  Called during app startup (lifespan), before the store client
               is created.
        Raises ValueError listing every missing value.
        """
        errors = []
        if not self.mongo_db.strip():
            errors.append(
                "MONGO_DB is not set. "
                "Provide a MongoDB connection string, e.g. mongodb://localhost:27017"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
