"""Configuration management for SheetDiff."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


def _parse_label_columns() -> list[str]:
    """Parse the row label headers used when summarizing modified rows."""
    labels_env = os.getenv("LABEL_COLUMNS", "Name,Title")
    return [label.strip() for label in labels_env.split(",") if label.strip()]


class Settings(BaseModel):
    """Application settings."""

    # Key column used when the caller does not pass one (unset means positional)
    default_key_column: Optional[str] = os.getenv("DEFAULT_KEY_COLUMN") or None

    # Values longer than this are truncated in text output
    max_value_display_chars: int = int(os.getenv("MAX_VALUE_DISPLAY_CHARS", "100"))

    # Header names whose values label a modified row (matched by substring)
    label_columns: list[str] = _parse_label_columns()

    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()


settings = Settings()
