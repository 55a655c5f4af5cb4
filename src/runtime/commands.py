"""Dispatcher that applies UI commands to the pomodoro timer."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from contracts.ui_protocol import (
    COMMAND_PREVIEW_SOUND,
    COMMAND_RESET,
    COMMAND_RESET_SETTINGS,
    COMMAND_SWITCH_MODE,
    COMMAND_TOGGLE,
    COMMAND_UPDATE_SETTINGS,
)
from pomodoro import PomodoroActionResult, PomodoroTimer
from pomodoro.constants import REASON_UNSUPPORTED_ACTION

from .contracts import NotificationPermissionLike
from .messages import rejection_text, status_message
from .ui import RuntimeUIPublisher

_SETTINGS_ACTIONS = frozenset({COMMAND_UPDATE_SETTINGS, COMMAND_RESET_SETTINGS})


class RuntimeCommandDispatcher:
    """Routes validated UI commands to timer operations and publishes results."""
    def __init__(
        self,
        *,
        logger: logging.Logger,
        pomodoro_timer: PomodoroTimer,
        ui: RuntimeUIPublisher,
        notifier: Optional[NotificationPermissionLike] = None,
    ):
        self._logger = logger
        self._pomodoro_timer = pomodoro_timer
        self._ui = ui
        self._notifier = notifier
        self._handlers: dict[str, Callable[[Mapping[str, Any]], PomodoroActionResult]] = {
            COMMAND_TOGGLE: lambda _args: self._pomodoro_timer.toggle(),
            COMMAND_RESET: lambda _args: self._pomodoro_timer.reset(),
            COMMAND_SWITCH_MODE: self._switch_mode,
            COMMAND_UPDATE_SETTINGS: self._update_settings,
            COMMAND_RESET_SETTINGS: lambda _args: self._pomodoro_timer.reset_settings(),
            COMMAND_PREVIEW_SOUND: lambda _args: self._pomodoro_timer.preview_sound(),
        }

    def handle_command(self, command: Mapping[str, Any]) -> Optional[PomodoroActionResult]:
        action = command.get("action")
        raw_arguments = command.get("arguments")
        arguments: Mapping[str, Any] = raw_arguments if isinstance(raw_arguments, Mapping) else {}

        handler = self._handlers.get(action) if isinstance(action, str) else None
        if handler is None:
            self._logger.warning("Unsupported UI command: %r", action)
            self._ui.publish_error(rejection_text(str(action), REASON_UNSUPPORTED_ACTION))
            return None

        result = handler(arguments)
        self._logger.debug(
            "Command %s -> accepted=%s reason=%s",
            action,
            result.accepted,
            result.reason,
        )
        self._publish_result(result)
        return result

    def publish_sync(self, *, action: str, reason: str) -> None:
        snapshot = self._pomodoro_timer.snapshot()
        self._ui.publish_settings(self._pomodoro_timer.settings)
        self._publish_permission()
        self._ui.publish_pomodoro_update(
            snapshot,
            action=action,
            accepted=True,
            reason=reason,
            message=status_message(snapshot),
        )

    def _switch_mode(self, arguments: Mapping[str, Any]) -> PomodoroActionResult:
        raw_mode = arguments.get("mode")
        mode = raw_mode.strip().lower() if isinstance(raw_mode, str) else ""
        return self._pomodoro_timer.switch_mode(mode)

    def _update_settings(self, arguments: Mapping[str, Any]) -> PomodoroActionResult:
        raw_settings = arguments.get("settings")
        changes = raw_settings if isinstance(raw_settings, Mapping) else {}
        return self._pomodoro_timer.update_settings(changes)

    def _publish_result(self, result: PomodoroActionResult) -> None:
        if result.action in _SETTINGS_ACTIONS:
            self._ui.publish_settings(self._pomodoro_timer.settings)
            self._publish_permission()

        message = (
            status_message(result.snapshot)
            if result.accepted
            else rejection_text(result.action, result.reason)
        )
        self._ui.publish_pomodoro_update(
            result.snapshot,
            action=result.action,
            accepted=result.accepted,
            reason=result.reason,
            message=message,
        )

    def _publish_permission(self) -> None:
        if self._notifier is not None:
            self._ui.publish_notification_permission(self._notifier.permission)
