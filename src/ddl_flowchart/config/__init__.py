"""Configuration management for ddl-flowchart."""
from .app import (
    AppConfig,
    LayoutConfig,
    LoggingConfig,
    WebConfig,
    load_app_config,
)
from .settings import Settings

__all__ = [
    "AppConfig",
    "LayoutConfig",
    "LoggingConfig",
    "WebConfig",
    "load_app_config",
    "Settings",
]
