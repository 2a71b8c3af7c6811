"""
milestones.settings
===================

Configuration settings for the milestones application.

This module provides centralized configuration options that can be used across
the application. It includes default values that can be overridden
via environment variables.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings

# ---------------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------------
# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent

# Database settings
# ---------------------------------------------------------------------------
DB_FILE = os.environ.get("MILESTONES_DB_FILE", BASE_DIR / "milestones.db")
DB_URL = f"sqlite:///{DB_FILE}"
DB_ECHO = os.environ.get("MILESTONES_DB_ECHO", "False").lower() == "true"

# API settings
# ---------------------------------------------------------------------------
API_HOST = os.environ.get("MILESTONES_API_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("MILESTONES_API_PORT", "8000"))
API_DEBUG = os.environ.get("MILESTONES_API_DEBUG", "False").lower() == "true"

# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("MILESTONES_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ---------------------------------------------------------------------------
# Pydantic settings model for the HTTP layer
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Pydantic model for application settings, loaded from environment variables."""

    shop_base_url: HttpUrl = Field(
        default=os.environ.get("SHOP_BASE_URL", "https://recoverytokenstore.com"),
        description="Storefront origin used to absolutise milestone shop links",
    )
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:5173",    # Vite dev server default port
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Origins allowed by the CORS middleware",
    )
    log_level: str = Field(LOG_LEVEL, description="Root log level for the API process")

    class Config:
        """Configuration for the settings model."""
        env_prefix = ""  # no prefix, use variable names as-is
        env_file = ".env"  # load from .env file if present
        case_sensitive = False  # case-insensitive environment variables


def configure_logging(level: Optional[str] = None) -> None:
    """Install a basic stream handler on the root logger (idempotent)."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)


# Initialize settings
settings = Settings()
