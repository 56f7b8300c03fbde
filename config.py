"""
config.py
---------
Centralised configuration for the schema intelligence service.

Loads settings from environment variables (with .env file support via
python-dotenv). Provides typed settings as frozen dataclasses so the
configuration is immutable at runtime.

Design Decision:
    Class-level defaults mean the analyzers work out of the box against a
    local Oracle XE instance, while deployments override everything through
    the environment.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=_env_path)


@dataclass(frozen=True)
class CatalogConfig:
    """Connection settings for the catalog being introspected."""
    dsn: str = field(
        default_factory=lambda: os.getenv("CATALOG_DSN", "localhost:1521/XEPDB1")
    )
    user: str = field(default_factory=lambda: os.getenv("CATALOG_USER", ""))
    password: str = field(default_factory=lambda: os.getenv("CATALOG_PASSWORD", ""))
    connect_timeout: int = field(
        default_factory=lambda: int(os.getenv("CATALOG_CONNECT_TIMEOUT", "10"))
    )
    max_retries: int = field(
        default_factory=lambda: int(os.getenv("CATALOG_MAX_RETRIES", "3"))
    )
    retry_delay: float = field(
        default_factory=lambda: float(os.getenv("CATALOG_RETRY_DELAY", "1.0"))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Log level and optional log file."""
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper()
    )
    log_file: str | None = field(
        default_factory=lambda: os.getenv("LOG_FILE")  # None → log to stderr only
    )


@dataclass(frozen=True)
class ApiConfig:
    """HTTP listener settings."""
    host: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))


@dataclass(frozen=True)
class AppConfig:
    """Root application configuration."""
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    app_name: str = "Schema Intelligence"
    app_version: str = "1.0.0"


def load_config() -> AppConfig:
    """
    Build and return the application configuration.

    Example::

        cfg = load_config()
        print(cfg.catalog.dsn)        # "localhost:1521/XEPDB1"
        print(cfg.api.port)           # 8000
    """
    return AppConfig()


# Module-level singleton used throughout the application
CONFIG: AppConfig = load_config()


def get_log_level() -> int:
    """Convert string log level from config to logging module constant."""
    level = getattr(logging, CONFIG.logging.log_level, None)
    if not isinstance(level, int):
        return logging.INFO
    return level
