"""Credential file and environment handling for the `cb` CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import dotenv_values, load_dotenv, set_key

from ..client import DEFAULT_BASE_URL, CodebaseClient, Connection

API_USERNAME_ENV = "CODEBASE_API_USERNAME"
API_KEY_ENV = "CODEBASE_API_KEY"
BASE_URL_ENV = "CODEBASE_BASE_URL"
CONFIG_DIR_ENV = "CODEBASE_CONFIG_DIR"

CREDENTIALS_FILENAME = "credentials.env"


class ConfigError(ValueError):
    """Raised when credentials are missing or unreadable."""


@dataclass(frozen=True)
class Credentials:
    api_username: str  # "account/username"
    api_key: str

    @property
    def account(self) -> str:
        return self.api_username.split("/")[0]

    @property
    def username(self) -> str:
        parts = self.api_username.split("/")
        return parts[1] if len(parts) > 1 else self.api_username


def config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "cb"
    return Path.home() / ".config" / "cb"


def credentials_path() -> Path:
    return config_dir() / CREDENTIALS_FILENAME


def save_credentials(creds: Credentials, path: Optional[Path] = None) -> Path:
    """Write credentials to the dotenv-format credential file (mode 0600)."""
    path = path or credentials_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(mode=0o600, exist_ok=True)
    set_key(str(path), API_USERNAME_ENV, creds.api_username, quote_mode="never")
    set_key(str(path), API_KEY_ENV, creds.api_key, quote_mode="never")
    return path


def load_credentials(
    *, path: Optional[Path] = None, use_dotenv: bool = True
) -> Credentials:
    """
    Load credentials. Environment variables (optionally seeded from a local
    .env) take precedence over the credential file written by `cb login`.
    """
    if use_dotenv:
        load_dotenv()
    path = path or credentials_path()

    file_values: dict[str, Optional[str]] = {}
    if path.is_file():
        try:
            file_values = dotenv_values(path)
        except OSError as exc:
            raise ConfigError(f"Failed to read config file {path}: {exc}") from exc

    api_username = (
        os.getenv(API_USERNAME_ENV) or file_values.get(API_USERNAME_ENV) or ""
    ).strip()
    api_key = (os.getenv(API_KEY_ENV) or file_values.get(API_KEY_ENV) or "").strip()

    if not api_username or not api_key:
        raise ConfigError(f"No config found at {path}. Run `cb login` first.")
    return Credentials(api_username=api_username, api_key=api_key)


def load_base_url() -> str:
    return (os.getenv(BASE_URL_ENV) or "").strip() or DEFAULT_BASE_URL


def connection_from_credentials(
    creds: Credentials, *, base_url: Optional[str] = None
) -> Connection:
    return Connection(
        account=creds.account,
        username=creds.username,
        api_key=creds.api_key,
        base_url=base_url or load_base_url(),
    )


def create_client_from_config(**kwargs: Any) -> CodebaseClient:
    """Create a CodebaseClient from the credential file / environment."""
    creds = load_credentials()
    return CodebaseClient(connection_from_credentials(creds), **kwargs)


__all__ = [
    "ConfigError",
    "Credentials",
    "config_dir",
    "credentials_path",
    "save_credentials",
    "load_credentials",
    "load_base_url",
    "connection_from_credentials",
    "create_client_from_config",
    "API_USERNAME_ENV",
    "API_KEY_ENV",
    "BASE_URL_ENV",
    "CONFIG_DIR_ENV",
]
