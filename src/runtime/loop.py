"""Runtime orchestration loop for UI commands, scheduled ticks, and shutdown."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from queue import Empty, Queue
from typing import Any, Callable, Optional

from pomodoro import PomodoroTimer
from pomodoro.constants import ACTION_SYNC, REASON_STARTUP
from server.service import UIServer

from .commands import RuntimeCommandDispatcher
from .contracts import NotificationPermissionLike
from .scheduler import Scheduler
from .ticks import TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher

POLL_INTERVAL_SECONDS = 0.25

_STOP = object()


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and shutdown flow."""
    setup_signal_handlers: Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    scheduler: Scheduler
    pomodoro_timer: PomodoroTimer
    notifier: Optional[NotificationPermissionLike]
    ui_server: Optional[UIServer]
    hooks: RuntimeHooks


@dataclass
class RuntimeResources:
    """Mutable runtime resources created for the event loop lifecycle."""
    command_queue: Queue[Any] = field(default_factory=Queue)
    stop_requested: threading.Event = field(default_factory=threading.Event)


class RuntimeEngine:
    """Main loop: the only thread that mutates timer state.

    UI commands arrive on a queue from the server thread. Each iteration
    handles at most one command and then runs scheduler callbacks whose
    deadline has passed, so a pause or reset is always applied before any
    tick that is due at the same moment.
    """

    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._scheduler = bootstrap.scheduler
        self._pomodoro_timer = bootstrap.pomodoro_timer

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._dispatcher = RuntimeCommandDispatcher(
            logger=self._logger,
            pomodoro_timer=self._pomodoro_timer,
            ui=self._ui,
            notifier=bootstrap.notifier,
        )
        self._tick_processor = TickProcessor(
            TickDependencies(logger=self._logger, ui=self._ui)
        )
        self._pomodoro_timer.set_listener(self._tick_processor.handle_pomodoro_tick)
        self._resources = RuntimeResources()

        if bootstrap.ui_server is not None:
            bootstrap.ui_server.set_command_handler(self.submit_command)

    def submit_command(self, command: dict[str, Any]) -> None:
        """Queue a UI command; safe to call from any thread."""
        self._resources.command_queue.put(command)

    def request_stop(self) -> None:
        self._resources.stop_requested.set()
        self._resources.command_queue.put(_STOP)

    def run(self) -> int:
        self._dispatcher.publish_sync(action=ACTION_SYNC, reason=REASON_STARTUP)

        try:
            self._bootstrap.hooks.setup_signal_handlers(self.request_stop)
            self._logger.info("Ready! Waiting for commands ...")

            while not self._resources.stop_requested.is_set():
                self.run_once()
            self._logger.info("Shutdown requested.")
            return 0

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def run_once(self, max_wait_seconds: float = POLL_INTERVAL_SECONDS) -> None:
        timeout = self._scheduler.seconds_until_next(max_wait_seconds)
        command = self._poll_command(timeout)
        if command is _STOP:
            return
        if command is not None:
            self._handle_command(command)
        self._scheduler.run_due()

    def _poll_command(self, timeout: float) -> Optional[Any]:
        try:
            return self._resources.command_queue.get(timeout=timeout)
        except Empty:
            return None

    def _handle_command(self, command: Any) -> None:
        try:
            self._dispatcher.handle_command(command)
        except Exception as error:
            self._logger.error("Command handling failed: %s", error, exc_info=True)
            self._ui.publish_error(f"Command handling failed: {error}")

    def _shutdown(self) -> None:
        self._pomodoro_timer.set_listener(None)

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
