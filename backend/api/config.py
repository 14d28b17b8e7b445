"""
Graph API Backend — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Imported by the application factory, the logging setup and the
       `graph-api` entry point.
When:  Loaded once at module import time. Tests build their own `Settings`
       and hand them to `create_app()`.

Environment variables:
    PORT          HTTP port (default 3001)
    HOST          Bind address (default 0.0.0.0)
    LOG_LEVEL     fatal | error | warn | info | debug | trace (or Python names)
    NODE_ENV      "production" selects the compact log format,
                  "development" exposes error messages in 500 responses
    KUZU_DB_PATH  Embedded graph database file (default ./data/cve.db)
    CORS_ORIGINS  Comma-separated allowed origins (default *)
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


# Level names used by the Node tooling this service replaced, mapped onto
# Python logging level names.
_LEVEL_ALIASES = {
    "FATAL": "CRITICAL",
    "WARN": "WARNING",
    "TRACE": "DEBUG",
}
_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development; nothing is
    required to boot the server.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)

    # ── Runtime environment ───────────────────────────────────────────────
    # Unset unless NODE_ENV is exported; only "production" and
    # "development" change behaviour.
    node_env: Optional[str] = Field(default=None)

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalizes pino-style and Python level names to a logging level name."""
        upper = v.strip().upper()
        upper = _LEVEL_ALIASES.get(upper, upper)
        if upper not in _VALID_LEVELS:
            raise ValueError(
                f"Invalid log_level '{v}'. Must be one of: "
                "fatal, error, warn, info, debug, trace"
            )
        return upper

    @field_validator("node_env")
    @classmethod
    def normalize_node_env(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().lower()
        return v or None

    # ── Embedded graph database ───────────────────────────────────────────
    # What: File the KuzuDB engine persists to. The parent directory is
    # created on first connection.
    kuzu_db_path: str = Field(default="./data/cve.db")

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.node_env == "production"

    @property
    def is_development(self) -> bool:
        return self.node_env == "development"

    @property
    def database_path(self) -> Path:
        return Path(self.kuzu_db_path)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


settings = Settings()
