"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    AudioSettings,
    NotificationSettings,
    RuntimeSettings,
    UIServerSettings,
)

_ALLOWED_LOG_LEVELS = ("CRITICAL", "DEBUG", "ERROR", "INFO", "WARNING")
_ALLOWED_PERMISSIONS = ("default", "denied", "granted")
_TRUE_WORDS = ("true", "1", "yes", "on")
_FALSE_WORDS = ("false", "0", "no", "off")


class _SectionReader:
    """Reads typed values out of one TOML table, naming `section.key` on errors."""

    def __init__(self, root: Mapping[str, Any], name: str, *, base_dir: Path):
        raw = root.get(name)
        if raw is not None and not isinstance(raw, Mapping):
            raise AppConfigurationError(f"[{name}] must be a table.")
        self._values: Mapping[str, Any] = raw or {}
        self._name = name
        self._base_dir = base_dir

    def text(self, key: str, default: str = "") -> str:
        value = self._values.get(key, default)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise self._error(key, "must be a string")
        return value.strip()

    def choice(self, key: str, default: str, allowed: tuple[str, ...], *, upper: bool = False) -> str:
        value = self.text(key, default)
        value = value.upper() if upper else value.lower()
        if value not in allowed:
            raise self._error(key, f"must be one of: {', '.join(allowed)}")
        return value

    def flag(self, key: str, default: bool) -> bool:
        value = self._values.get(key, default)
        if isinstance(value, bool):
            return value
        word = value.strip().lower() if isinstance(value, str) else None
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise self._error(key, "must be a boolean")

    def integer(self, key: str, default: Optional[int]) -> Optional[int]:
        value = self._values.get(key, default)
        if value is None or (isinstance(value, int) and not isinstance(value, bool)):
            return value
        if not isinstance(value, str):
            raise self._error(key, "must be an integer")
        try:
            return int(value.strip())
        except ValueError as error:
            raise self._error(key, "must be an integer") from error

    def number(self, key: str, default: float) -> float:
        value = self._values.get(key, default)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if not isinstance(value, str):
            raise self._error(key, "must be a number")
        try:
            return float(value.strip())
        except ValueError as error:
            raise self._error(key, "must be a number") from error

    def path(self, key: str) -> str:
        """Resolve a path value relative to the config file's directory."""
        raw = self.text(key)
        if not raw:
            return ""
        candidate = Path(raw).expanduser()
        if not candidate.is_absolute():
            candidate = (self._base_dir / candidate).resolve()
        return str(candidate)

    def _error(self, key: str, problem: str) -> AppConfigurationError:
        return AppConfigurationError(f"{self._name}.{key} {problem}.")


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""

    def section(name: str) -> _SectionReader:
        return _SectionReader(raw, name, base_dir=base_dir)

    return AppConfig(
        runtime=_parse_runtime_settings(section("runtime")),
        audio=_parse_audio_settings(section("audio")),
        notifications=_parse_notification_settings(section("notifications")),
        ui_server=_parse_ui_server_settings(section("ui_server")),
        source_file=source_file,
    )


def _parse_runtime_settings(section: _SectionReader) -> RuntimeSettings:
    tick_interval = section.number("tick_interval_seconds", 1.0)
    if tick_interval <= 0:
        raise AppConfigurationError("runtime.tick_interval_seconds must be positive.")

    auto_start_delay = section.number("auto_start_delay_seconds", 1.0)
    if auto_start_delay < 0:
        raise AppConfigurationError("runtime.auto_start_delay_seconds must not be negative.")

    return RuntimeSettings(
        log_level=section.choice("log_level", "INFO", _ALLOWED_LOG_LEVELS, upper=True),
        tick_interval_seconds=tick_interval,
        auto_start_delay_seconds=auto_start_delay,
    )


def _parse_audio_settings(section: _SectionReader) -> AudioSettings:
    return AudioSettings(
        enabled=section.flag("enabled", True),
        output_device=section.integer("output_device", None),
        sample_rate_hz=section.integer("sample_rate_hz", 44100),
    )


def _parse_notification_settings(section: _SectionReader) -> NotificationSettings:
    return NotificationSettings(
        enabled=section.flag("enabled", True),
        app_name=section.text("app_name", "Pomodoro"),
        app_icon=section.path("app_icon"),
        timeout_seconds=section.integer("timeout_seconds", 5),
        permission=section.choice("permission", "default", _ALLOWED_PERMISSIONS),
    )


def _parse_ui_server_settings(section: _SectionReader) -> UIServerSettings:
    return UIServerSettings(
        enabled=section.flag("enabled", True),
        host=section.text("host", "127.0.0.1"),
        port=section.integer("port", 8765),
        index_file=section.path("index_file"),
        max_message_bytes=section.integer("max_message_bytes", 64 * 1024),
    )
