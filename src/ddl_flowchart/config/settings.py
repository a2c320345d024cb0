"""Environment settings for ddl-flowchart.

Loads settings from environment variables using python-dotenv.
"""
from __future__ import annotations
import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize settings from environment variables."""
        # Optional YAML config file
        self.config_path = os.getenv("DDL_FLOWCHART_CONFIG", "")

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "").upper()

        # Web server
        self.web_host = os.getenv("WEB_HOST", "")
        self.web_port = int(os.getenv("WEB_PORT", "0") or 0)
