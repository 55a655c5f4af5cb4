from __future__ import annotations

from typing import Any, Optional

from contracts.ui_protocol import (
    EVENT_ERROR,
    EVENT_NOTIFICATION_PERMISSION,
    EVENT_POMODORO,
    EVENT_SETTINGS,
)
from pomodoro import PomodoroSnapshot, TimerSettings

from .contracts import UIServerLike


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_pomodoro_update(
        self,
        snapshot: PomodoroSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
        message: Optional[str] = None,
    ) -> None:
        payload: dict[str, Any] = {
            "action": action,
            "mode": snapshot.mode,
            "label": snapshot.label,
            "running": snapshot.running,
            "duration_seconds": snapshot.duration_seconds,
            "remaining_seconds": snapshot.remaining_seconds,
            "display_time": snapshot.display_time,
            "completed_focus_sessions": snapshot.completed_focus_sessions,
            "long_break": snapshot.long_break,
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        if message:
            payload["message"] = message
        self.publish(EVENT_POMODORO, **payload)

    def publish_settings(self, settings: TimerSettings) -> None:
        self.publish(EVENT_SETTINGS, settings=settings.to_payload())

    def publish_notification_permission(self, permission: str) -> None:
        self.publish(EVENT_NOTIFICATION_PERMISSION, permission=permission)

    def publish_error(self, message: str) -> None:
        self.publish(EVENT_ERROR, message=message)
