"""Application configuration loading and validation.

Loads optional YAML configuration for the CLI and web app, with
environment overrides from Settings.
"""
from __future__ import annotations
import logging
import sys
import yaml
from pathlib import Path
from typing import Literal
from pydantic import BaseModel, Field, field_validator

from .settings import Settings


class LayoutConfig(BaseModel):
    """Grid placement of table nodes in the flow graph."""
    columns: int = Field(3, ge=1, le=50, description="Nodes per row")
    x_spacing: int = Field(300, ge=0, description="Horizontal distance between nodes")
    y_spacing: int = Field(400, ge=0, description="Vertical distance between rows")
    x_offset: int = Field(50, description="Left margin")
    y_offset: int = Field(50, description="Top margin")


class WebConfig(BaseModel):
    """Web API configuration."""
    host: str = Field("127.0.0.1", description="Bind address")
    port: int = Field(8000, ge=1, le=65535, description="Bind port")
    max_input_chars: int = Field(1_000_000, ge=1, description="Largest accepted SQL payload")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("WARNING", description="Log level")
    format: str = Field(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="logging format string"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class AppConfig(BaseModel):
    """Complete application configuration."""
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> AppConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If configuration is invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration in {config_path}: expected a mapping")

        try:
            return cls.model_validate(data)
        except Exception as e:
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e

    def configure_logging(self) -> None:
        """Route log records to stderr at the configured level."""
        logging.basicConfig(
            level=getattr(logging, self.logging.level),
            format=self.logging.format,
            handlers=[logging.StreamHandler(sys.stderr)],
            force=True,
        )


def load_app_config(config_path: str | Path | None = None) -> AppConfig:
    """Load application configuration from file or environment.

    Args:
        config_path: Optional explicit path to config file. Falls back to
            DDL_FLOWCHART_CONFIG, then to built-in defaults.

    Returns:
        Validated AppConfig instance with environment overrides applied

    Raises:
        FileNotFoundError: If an explicitly named config file is missing
        ValueError: If configuration is invalid
    """
    env = Settings()
    path = config_path or env.config_path

    config = AppConfig.from_yaml(path) if path else AppConfig()

    if env.log_level:
        config.logging = LoggingConfig(level=env.log_level, format=config.logging.format)
    if env.web_host:
        config.web.host = env.web_host
    if env.web_port:
        config.web.port = env.web_port

    return config
