"""
franchise_ops.settings
======================

Configuration settings for the franchise-operations core.

This module provides centralized configuration options that can be used across
the package and its HTTP layer. It includes default values that can be
overridden via environment variables.
"""

from __future__ import annotations

import logging
import os
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings

# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("FRANCHISE_OPS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# API settings
# ---------------------------------------------------------------------------
API_HOST = os.environ.get("FRANCHISE_OPS_API_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("FRANCHISE_OPS_API_PORT", "8000"))
API_DEBUG = os.environ.get("FRANCHISE_OPS_API_DEBUG", "False").lower() == "true"


# ---------------------------------------------------------------------------
# Pydantic settings model for the status rules
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Pydantic model for application settings, loaded from environment variables."""

    # Royalty payment windows. Grace is checked first, so the pending window
    # only shows up when it is longer than the grace window.
    grace_window_days: int = Field(10, ge=0, description="Days after the due date reported as grace")
    pending_window_days: int = Field(1, ge=0, description="Days after the due date reported as pending")

    # Marketing channel distribution shown for a new marketing action
    default_channels: Dict[str, int] = Field(
        default_factory=lambda: {"social media": 35, "email": 25, "search ads": 30, "website": 10},
        description="Default channel distribution for new marketing actions",
    )

    class Config:
        """Configuration for the settings model."""
        env_prefix = "FRANCHISE_OPS_"
        env_file = ".env"  # load from .env file if present
        case_sensitive = False


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Apply the package log format and level to the root logger."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


# Initialize settings
settings = Settings()
