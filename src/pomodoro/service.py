"""In-memory focus/break state machine driven by an injected tick source."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, Optional

from .constants import (
    ACTION_AUTO_STARTED,
    ACTION_COMPLETED,
    ACTION_PREVIEW_SOUND,
    ACTION_RESET,
    ACTION_RESET_SETTINGS,
    ACTION_SWITCH_MODE,
    ACTION_TICK,
    ACTION_TOGGLE,
    ACTION_UPDATE_SETTINGS,
    AUTO_START_DELAY_SECONDS,
    MODE_BREAK,
    MODE_FOCUS,
    MODES,
    REASON_INVALID_MODE,
    REASON_MODE_SWITCHED,
    REASON_PAUSED,
    REASON_RESET,
    REASON_SETTINGS_RESET,
    REASON_SETTINGS_UPDATED,
    REASON_SOUND_PLAYED,
    REASON_STARTED,
)
from .contracts import NotifierLike, TonePlayerLike
from .messages import completion_notification, format_duration, mode_label
from .settings import DEFAULT_SETTINGS, TimerSettings, apply_setting_changes
from .ticks import ScheduledCallLike, SchedulerLike, SchedulerTickSource, TickSource

PomodoroMode = Literal["focus", "break"]
PomodoroAction = Literal[
    "toggle",
    "reset",
    "switch_mode",
    "update_settings",
    "reset_settings",
    "preview_sound",
]


@dataclass(frozen=True)
class PomodoroSnapshot:
    """Immutable timer snapshot exposed to runtime and UI publishers."""
    mode: PomodoroMode
    remaining_seconds: int
    duration_seconds: int
    running: bool
    completed_focus_sessions: int
    long_break: bool = False

    @property
    def label(self) -> str:
        return mode_label(self.mode, long_break=self.long_break)

    @property
    def display_time(self) -> str:
        return format_duration(self.remaining_seconds)


@dataclass(frozen=True)
class PomodoroActionResult:
    """Result envelope returned after applying a user action."""
    action: str
    accepted: bool
    reason: str
    snapshot: PomodoroSnapshot


@dataclass(frozen=True)
class PomodoroTick:
    """Timer-driven update: a countdown step, a completion, or an auto-start."""
    snapshot: PomodoroSnapshot
    action: str = ACTION_TICK

    @property
    def completed(self) -> bool:
        return self.action == ACTION_COMPLETED


class PomodoroTimer:
    """Focus/break cycle with session counting and long-break cadence."""

    def __init__(
        self,
        *,
        scheduler: SchedulerLike,
        settings: Optional[TimerSettings] = None,
        tick_source: Optional[TickSource] = None,
        notifier: Optional[NotifierLike] = None,
        tone_player: Optional[TonePlayerLike] = None,
        listener: Optional[Callable[[PomodoroTick], None]] = None,
        auto_start_delay_seconds: float = AUTO_START_DELAY_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if auto_start_delay_seconds < 0:
            raise ValueError("auto_start_delay_seconds must not be negative")

        self._scheduler = scheduler
        self._tick_source = tick_source or SchedulerTickSource(scheduler)
        self._notifier = notifier
        self._tone_player = tone_player
        self._listener = listener
        self._auto_start_delay_seconds = float(auto_start_delay_seconds)
        self._logger = logger or logging.getLogger("pomodoro")
        self._lock = threading.Lock()

        self._settings = settings or DEFAULT_SETTINGS
        self._mode: PomodoroMode = MODE_FOCUS
        self._duration_seconds = self._settings.focus_minutes * 60
        self._remaining_seconds = self._duration_seconds
        self._running = False
        self._completed_focus_sessions = 0
        self._long_break = False
        self._pending_auto_start: Optional[ScheduledCallLike] = None

    @property
    def settings(self) -> TimerSettings:
        with self._lock:
            return self._settings

    def set_listener(self, listener: Optional[Callable[[PomodoroTick], None]]) -> None:
        self._listener = listener

    def snapshot(self) -> PomodoroSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def toggle(self) -> PomodoroActionResult:
        with self._lock:
            self._cancel_auto_start_locked()
            if self._running:
                self._stop_locked()
                self._logger.info(
                    "Timer paused: mode=%s remaining=%ss",
                    self._mode,
                    self._remaining_seconds,
                )
                return self._result_locked(ACTION_TOGGLE, True, REASON_PAUSED)

            self._start_locked()
            self._logger.info(
                "Timer started: mode=%s remaining=%ss",
                self._mode,
                self._remaining_seconds,
            )
            return self._result_locked(ACTION_TOGGLE, True, REASON_STARTED)

    def reset(self) -> PomodoroActionResult:
        with self._lock:
            self._cancel_auto_start_locked()
            self._stop_locked()
            self._load_mode_locked(self._mode)
            self._logger.info(
                "Timer reset: mode=%s remaining=%ss",
                self._mode,
                self._remaining_seconds,
            )
            return self._result_locked(ACTION_RESET, True, REASON_RESET)

    def switch_mode(self, mode: str) -> PomodoroActionResult:
        with self._lock:
            if mode not in MODES:
                return self._result_locked(ACTION_SWITCH_MODE, False, REASON_INVALID_MODE)

            self._cancel_auto_start_locked()
            self._stop_locked()
            self._load_mode_locked(mode)  # type: ignore[arg-type]
            self._logger.info(
                "Mode switched: mode=%s remaining=%ss",
                self._mode,
                self._remaining_seconds,
            )
            return self._result_locked(ACTION_SWITCH_MODE, True, REASON_MODE_SWITCHED)

    def update_settings(
        self,
        changes: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> PomodoroActionResult:
        merged: dict[str, Any] = dict(changes or {})
        merged.update(kwargs)
        with self._lock:
            previous = self._settings
            updated, ignored = apply_setting_changes(previous, merged)
            self._replace_settings_locked(updated)
            result = self._result_locked(ACTION_UPDATE_SETTINGS, True, REASON_SETTINGS_UPDATED)

        if ignored:
            self._logger.warning("Ignoring unknown settings fields: %s", ", ".join(ignored))
        self._after_settings_change(previous, updated)
        return result

    def reset_settings(self) -> PomodoroActionResult:
        with self._lock:
            previous = self._settings
            self._replace_settings_locked(DEFAULT_SETTINGS)
            result = self._result_locked(ACTION_RESET_SETTINGS, True, REASON_SETTINGS_RESET)

        self._logger.info("Settings restored to defaults")
        self._after_settings_change(previous, DEFAULT_SETTINGS)
        return result

    def preview_sound(self) -> PomodoroActionResult:
        with self._lock:
            volume = self._settings.sound_volume
            result = self._result_locked(ACTION_PREVIEW_SOUND, True, REASON_SOUND_PLAYED)
        self._play_tone(volume)
        return result

    def tick(self) -> Optional[PomodoroTick]:
        """Advance the countdown by one second; None when the tick is stale."""
        completion: Optional[tuple[str, TimerSettings]] = None
        with self._lock:
            if not self._running or self._remaining_seconds <= 0:
                return None

            self._remaining_seconds -= 1
            if self._remaining_seconds > 0:
                self._logger.debug(
                    "Tick: mode=%s remaining=%ss",
                    self._mode,
                    self._remaining_seconds,
                )
                tick = PomodoroTick(snapshot=self._snapshot_locked())
            else:
                completion = (self._mode, self._settings)
                self._stop_locked()
                self._advance_locked()
                tick = PomodoroTick(
                    snapshot=self._snapshot_locked(),
                    action=ACTION_COMPLETED,
                )

        if completion is not None:
            self._run_completion_effects(*completion)
        self._emit(tick)
        return tick

    def _advance_locked(self) -> None:
        settings = self._settings
        finished = self._mode
        if finished == MODE_FOCUS:
            self._completed_focus_sessions += 1
            self._mode = MODE_BREAK
            self._long_break = (
                self._completed_focus_sessions % settings.long_break_interval == 0
            )
            minutes = settings.long_break_minutes if self._long_break else settings.break_minutes
        else:
            self._mode = MODE_FOCUS
            self._long_break = False
            minutes = settings.focus_minutes

        self._duration_seconds = minutes * 60
        self._remaining_seconds = self._duration_seconds
        self._logger.info(
            "Interval completed: finished=%s next=%s remaining=%ss sessions=%d",
            finished,
            self._mode,
            self._remaining_seconds,
            self._completed_focus_sessions,
        )

        if settings.auto_start:
            self._pending_auto_start = self._scheduler.call_later(
                self._auto_start_delay_seconds,
                self._auto_start,
            )

    def _auto_start(self) -> None:
        with self._lock:
            self._pending_auto_start = None
            if self._running:
                return
            self._start_locked()
            self._logger.info("Timer auto-started: mode=%s", self._mode)
            tick = PomodoroTick(
                snapshot=self._snapshot_locked(),
                action=ACTION_AUTO_STARTED,
            )
        self._emit(tick)

    def _after_settings_change(self, previous: TimerSettings, updated: TimerSettings) -> None:
        if updated.notifications_enabled and not previous.notifications_enabled:
            self._request_notification_permission()

    def _replace_settings_locked(self, updated: TimerSettings) -> None:
        previous = self._settings
        self._settings = updated
        if self._mode == MODE_FOCUS and updated.focus_minutes != previous.focus_minutes:
            self._load_mode_locked(MODE_FOCUS)
        elif self._mode == MODE_BREAK and updated.break_minutes != previous.break_minutes:
            self._load_mode_locked(MODE_BREAK)

    def _load_mode_locked(self, mode: PomodoroMode) -> None:
        self._mode = mode
        self._long_break = False
        if mode == MODE_FOCUS:
            self._duration_seconds = self._settings.focus_minutes * 60
        else:
            self._duration_seconds = self._settings.break_minutes * 60
        self._remaining_seconds = self._duration_seconds

    def _start_locked(self) -> None:
        self._running = True
        self._tick_source.start(self._on_tick)

    def _stop_locked(self) -> None:
        self._tick_source.stop()
        self._running = False

    def _cancel_auto_start_locked(self) -> None:
        pending = self._pending_auto_start
        self._pending_auto_start = None
        if pending is not None:
            pending.cancel()

    def _on_tick(self) -> None:
        self.tick()

    def _run_completion_effects(self, completed_mode: str, settings: TimerSettings) -> None:
        if settings.sound_enabled:
            self._play_tone(settings.sound_volume)
        if settings.notifications_enabled and self._notifier is not None:
            title, body = completion_notification(completed_mode)
            try:
                self._notifier.notify(title, body)
            except Exception as error:
                self._logger.warning("Completion notification failed: %s", error)

    def _play_tone(self, volume: int) -> None:
        if self._tone_player is None:
            return
        try:
            self._tone_player.play(volume)
        except Exception as error:
            self._logger.warning("Completion tone failed: %s", error)

    def _request_notification_permission(self) -> None:
        if self._notifier is None:
            return
        try:
            permission = self._notifier.request_permission()
        except Exception as error:
            self._logger.warning("Notification permission request failed: %s", error)
            return
        self._logger.info("Notification permission: %s", permission)

    def _emit(self, tick: PomodoroTick) -> None:
        listener = self._listener
        if listener is not None:
            listener(tick)

    def _result_locked(self, action: str, accepted: bool, reason: str) -> PomodoroActionResult:
        return PomodoroActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self._snapshot_locked(),
        )

    def _snapshot_locked(self) -> PomodoroSnapshot:
        return PomodoroSnapshot(
            mode=self._mode,
            remaining_seconds=self._remaining_seconds,
            duration_seconds=self._duration_seconds,
            running=self._running,
            completed_focus_sessions=self._completed_focus_sessions,
            long_break=self._long_break,
        )
