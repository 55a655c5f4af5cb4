"""Protocols describing runtime-facing UI and notification capabilities."""

from __future__ import annotations

from typing import Any, Protocol


class UIServerLike(Protocol):
    """Subset of the UI server used to publish events."""
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class NotificationPermissionLike(Protocol):
    """Read-only view of the notifier permission state."""
    @property
    def permission(self) -> str:
        ...
