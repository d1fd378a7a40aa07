"""Ambient concerns shared by the client and the CLI (config, logging)."""

from .config import (
    ConfigError,
    Credentials,
    create_client_from_config,
    credentials_path,
    load_credentials,
    save_credentials,
)
from .logging import LogfmtFormatter, setup_logging

__all__ = [
    # Config helpers
    "ConfigError",
    "Credentials",
    "credentials_path",
    "load_credentials",
    "save_credentials",
    "create_client_from_config",
    # Logging
    "LogfmtFormatter",
    "setup_logging",
]
