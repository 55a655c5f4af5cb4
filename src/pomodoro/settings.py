"""User-editable timer settings and lenient coercion of raw UI input."""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Mapping

from .constants import (
    DEFAULT_AUTO_START,
    DEFAULT_BREAK_MINUTES,
    DEFAULT_FOCUS_MINUTES,
    DEFAULT_LONG_BREAK_INTERVAL,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_NOTIFICATIONS_ENABLED,
    DEFAULT_SOUND_ENABLED,
    DEFAULT_SOUND_VOLUME,
    MAX_BREAK_MINUTES,
    MAX_FOCUS_MINUTES,
    MAX_LONG_BREAK_INTERVAL,
    MAX_LONG_BREAK_MINUTES,
    MAX_SOUND_VOLUME,
    MIN_LONG_BREAK_INTERVAL,
    MIN_MINUTES,
    MIN_SOUND_VOLUME,
)

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off"})


@dataclass(frozen=True)
class TimerSettings:
    """Interval durations and behaviour toggles edited from the settings dialog."""
    focus_minutes: int = DEFAULT_FOCUS_MINUTES
    break_minutes: int = DEFAULT_BREAK_MINUTES
    long_break_minutes: int = DEFAULT_LONG_BREAK_MINUTES
    long_break_interval: int = DEFAULT_LONG_BREAK_INTERVAL
    auto_start: bool = DEFAULT_AUTO_START
    sound_enabled: bool = DEFAULT_SOUND_ENABLED
    sound_volume: int = DEFAULT_SOUND_VOLUME
    notifications_enabled: bool = DEFAULT_NOTIFICATIONS_ENABLED

    def __post_init__(self) -> None:
        for name in ("focus_minutes", "break_minutes", "long_break_minutes"):
            if getattr(self, name) < MIN_MINUTES:
                raise ValueError(f"{name} must be at least {MIN_MINUTES}")
        if self.long_break_interval < MIN_LONG_BREAK_INTERVAL:
            raise ValueError(
                f"long_break_interval must be at least {MIN_LONG_BREAK_INTERVAL}"
            )
        if not MIN_SOUND_VOLUME <= self.sound_volume <= MAX_SOUND_VOLUME:
            raise ValueError(
                f"sound_volume must be in [{MIN_SOUND_VOLUME}, {MAX_SOUND_VOLUME}]"
            )

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_SETTINGS = TimerSettings()

SETTING_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(TimerSettings))


def parse_int_prefix(value: Any) -> int | None:
    """Parse the leading integer of user input, or return None when there is none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if match:
            return int(match.group(1))
    return None


def coerce_bounded_int(
    value: Any,
    *,
    default: int,
    minimum: int,
    maximum: int,
) -> int:
    """Substitute `default` for unusable input and clamp oversized values."""
    parsed = parse_int_prefix(value)
    if parsed is None or parsed < minimum:
        return default
    return min(parsed, maximum)


def coerce_volume(value: Any) -> int:
    parsed = parse_int_prefix(value)
    if parsed is None:
        return DEFAULT_SOUND_VOLUME
    return max(MIN_SOUND_VOLUME, min(MAX_SOUND_VOLUME, parsed))


def coerce_bool(value: Any, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
    return default


def _minutes(default: int, maximum: int) -> Callable[[Any], int]:
    return lambda value: coerce_bounded_int(
        value,
        default=default,
        minimum=MIN_MINUTES,
        maximum=maximum,
    )


def _flag(default: bool) -> Callable[[Any], bool]:
    return lambda value: coerce_bool(value, default=default)


_COERCERS: dict[str, Callable[[Any], Any]] = {
    "focus_minutes": _minutes(DEFAULT_FOCUS_MINUTES, MAX_FOCUS_MINUTES),
    "break_minutes": _minutes(DEFAULT_BREAK_MINUTES, MAX_BREAK_MINUTES),
    "long_break_minutes": _minutes(DEFAULT_LONG_BREAK_MINUTES, MAX_LONG_BREAK_MINUTES),
    "long_break_interval": lambda value: coerce_bounded_int(
        value,
        default=DEFAULT_LONG_BREAK_INTERVAL,
        minimum=MIN_LONG_BREAK_INTERVAL,
        maximum=MAX_LONG_BREAK_INTERVAL,
    ),
    "auto_start": _flag(DEFAULT_AUTO_START),
    "sound_enabled": _flag(DEFAULT_SOUND_ENABLED),
    "sound_volume": coerce_volume,
    "notifications_enabled": _flag(DEFAULT_NOTIFICATIONS_ENABLED),
}


def coerce_setting(name: str, value: Any) -> Any:
    """Coerce one raw field value; raises KeyError for unknown field names."""
    return _COERCERS[name](value)


def apply_setting_changes(
    settings: TimerSettings,
    changes: Mapping[str, Any],
) -> tuple[TimerSettings, list[str]]:
    """Return updated settings plus the names of ignored unknown fields."""
    accepted: dict[str, Any] = {}
    ignored: list[str] = []
    for name, raw_value in changes.items():
        if name not in _COERCERS:
            ignored.append(str(name))
            continue
        accepted[name] = coerce_setting(name, raw_value)
    if not accepted:
        return settings, ignored
    return replace(settings, **accepted), ignored
