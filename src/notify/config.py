"""Configuration model for desktop notifications."""

from __future__ import annotations

from dataclasses import dataclass

PERMISSION_DEFAULT = "default"
PERMISSION_GRANTED = "granted"
PERMISSION_DENIED = "denied"

PERMISSIONS: frozenset[str] = frozenset(
    {PERMISSION_DEFAULT, PERMISSION_GRANTED, PERMISSION_DENIED}
)


class NotifyConfigurationError(Exception):
    """Raised when notification configuration is invalid."""


@dataclass(frozen=True)
class NotifyConfig:
    """Desktop notification presentation and initial permission."""
    enabled: bool = True
    app_name: str = "Pomodoro"
    app_icon: str = ""
    timeout_seconds: int = 5
    permission: str = PERMISSION_DEFAULT

    def __post_init__(self) -> None:
        if self.permission not in PERMISSIONS:
            allowed = ", ".join(sorted(PERMISSIONS))
            raise NotifyConfigurationError(f"permission must be one of: {allowed}")
        if self.timeout_seconds < 1:
            raise NotifyConfigurationError(
                f"timeout_seconds must be at least 1, got: {self.timeout_seconds}"
            )

    @classmethod
    def from_settings(cls, settings) -> "NotifyConfig":
        permission = (settings.permission or PERMISSION_DEFAULT).strip().lower()
        return cls(
            enabled=bool(settings.enabled),
            app_name=settings.app_name.strip() or "Pomodoro",
            app_icon=settings.app_icon,
            timeout_seconds=int(settings.timeout_seconds),
            permission=permission,
        )
