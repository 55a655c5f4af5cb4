"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class RuntimeSettings:
    """Event-loop and logging settings from `[runtime]`."""
    log_level: str = "INFO"
    tick_interval_seconds: float = 1.0
    auto_start_delay_seconds: float = 1.0


@dataclass(frozen=True)
class AudioSettings:
    """Completion-tone playback settings from `[audio]`."""
    enabled: bool = True
    output_device: Optional[int] = None
    sample_rate_hz: int = 44100


@dataclass(frozen=True)
class NotificationSettings:
    """Desktop notification settings from `[notifications]`."""
    enabled: bool = True
    app_name: str = "Pomodoro"
    app_icon: str = ""
    timeout_seconds: int = 5
    permission: str = "default"


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""
    max_message_bytes: int = 64 * 1024


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    runtime: RuntimeSettings = field(default_factory=RuntimeSettings)
    audio: AudioSettings = field(default_factory=AudioSettings)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    ui_server: UIServerSettings = field(default_factory=UIServerSettings)
    source_file: str = ""
