"""Locate and load config.toml into typed application settings."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from app_config_parser import parse_app_config
from app_config_schema import (
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    AudioSettings,
    NotificationSettings,
    RuntimeSettings,
    UIServerSettings,
)

CONFIG_PATH_ENV = "APP_CONFIG_FILE"

__all__ = [
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG_FILE",
    "AppConfig",
    "AppConfigurationError",
    "AudioSettings",
    "NotificationSettings",
    "RuntimeSettings",
    "UIServerSettings",
    "load_app_config",
    "resolve_config_path",
]


def resolve_config_path(config_path: str | None = None) -> Path:
    """Pick the config file: explicit argument, then $APP_CONFIG_FILE, then ./config.toml.

    Only the implicit ./config.toml falls back to a copy bundled into a frozen
    executable.
    """
    explicit = config_path or os.getenv(CONFIG_PATH_ENV)
    path = Path(explicit or DEFAULT_CONFIG_FILE).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    if explicit or path.exists():
        return path

    bundle_root = getattr(sys, "_MEIPASS", None)
    if bundle_root:
        bundled = Path(bundle_root) / DEFAULT_CONFIG_FILE
        if bundled.is_file():
            return bundled
    return path


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as fh:
            raw: Any = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as error:
        raise AppConfigurationError(f"Failed to read config TOML {path}: {error}") from error
    if not isinstance(raw, Mapping):
        raise AppConfigurationError("Root config TOML object must be a table.")
    return raw


def load_app_config(
    config_path: str | None = None,
    *,
    required: bool = True,
) -> AppConfig:
    """Load config.toml; with `required=False` a missing file yields defaults."""
    path = resolve_config_path(config_path)
    if not path.exists():
        if required:
            raise AppConfigurationError(f"Config file not found: {path}")
        return AppConfig(source_file="")
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    raw = _read_toml(path)
    return parse_app_config(raw, base_dir=path.parent, source_file=str(path))
