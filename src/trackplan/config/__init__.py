"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError
from .logging import configure_logging, get_log_level
from .storage import DatabaseConfig, get_data_dir, get_database_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "configure_logging",
    "get_data_dir",
    "get_database_config",
    "get_log_level",
]
