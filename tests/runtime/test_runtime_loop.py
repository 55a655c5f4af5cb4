import logging
import unittest

from pomodoro import PomodoroTimer, SchedulerTickSource, TimerSettings
from runtime.loop import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from runtime.scheduler import Scheduler


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []
        self.command_handler = None
        self.stopped = False

    def set_command_handler(self, handler) -> None:
        self.command_handler = handler

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))

    def stop(self, timeout_seconds: float = 5.0) -> None:
        del timeout_seconds
        self.stopped = True


class RuntimeEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _Clock()
        self.scheduler = Scheduler(clock=self.clock)
        self.pomodoro_timer = PomodoroTimer(
            scheduler=self.scheduler,
            settings=TimerSettings(focus_minutes=1),
            tick_source=SchedulerTickSource(self.scheduler),
        )
        self.ui_server = _UIServerStub()
        self.installed_handlers = []

    def _engine(self, setup_signal_handlers=None) -> RuntimeEngine:
        return RuntimeEngine(
            RuntimeBootstrap(
                logger=logging.getLogger("test"),
                scheduler=self.scheduler,
                pomodoro_timer=self.pomodoro_timer,
                notifier=None,
                ui_server=self.ui_server,  # type: ignore[arg-type]
                hooks=RuntimeHooks(
                    setup_signal_handlers=setup_signal_handlers
                    or self.installed_handlers.append
                ),
            )
        )

    def _pomodoro_events(self) -> list[dict[str, object]]:
        return [payload for kind, payload in self.ui_server.events if kind == "pomodoro"]

    def test_registers_command_handler_with_ui_server(self) -> None:
        engine = self._engine()
        self.assertEqual(engine.submit_command, self.ui_server.command_handler)

    def test_submitted_command_is_applied_on_next_iteration(self) -> None:
        engine = self._engine()
        engine.submit_command({"action": "toggle", "arguments": {}})

        engine.run_once(max_wait_seconds=0)

        self.assertTrue(self.pomodoro_timer.snapshot().running)
        self.assertEqual("toggle", self._pomodoro_events()[-1]["action"])

    def test_due_ticks_are_published_from_the_loop(self) -> None:
        engine = self._engine()
        self.pomodoro_timer.toggle()
        self.clock.now = 1.0

        engine.run_once(max_wait_seconds=0)

        self.assertEqual(59, self.pomodoro_timer.snapshot().remaining_seconds)
        self.assertEqual("tick", self._pomodoro_events()[-1]["action"])

    def test_pause_is_applied_before_tick_due_at_same_moment(self) -> None:
        engine = self._engine()
        self.pomodoro_timer.toggle()
        self.clock.now = 1.0
        engine.submit_command({"action": "toggle", "arguments": {}})

        engine.run_once(max_wait_seconds=0)
        self.clock.now = 3.0
        engine.run_once(max_wait_seconds=0)

        snapshot = self.pomodoro_timer.snapshot()
        self.assertFalse(snapshot.running)
        self.assertEqual(60, snapshot.remaining_seconds)

    def test_malformed_command_publishes_error_and_keeps_running(self) -> None:
        engine = self._engine()
        engine.submit_command("not-a-command")  # type: ignore[arg-type]

        with self.assertLogs("test", level="ERROR"):
            engine.run_once(max_wait_seconds=0)

        errors = [payload for kind, payload in self.ui_server.events if kind == "error"]
        self.assertEqual(1, len(errors))
        self.assertIn("Command handling failed", str(errors[0]["message"]))

    def test_run_publishes_startup_sync_and_shuts_down_on_stop(self) -> None:
        engine = self._engine(setup_signal_handlers=lambda request_stop: request_stop())

        exit_code = engine.run()

        self.assertEqual(0, exit_code)
        kinds = [kind for kind, _ in self.ui_server.events]
        self.assertEqual(["settings", "pomodoro"], kinds)
        self.assertEqual("startup", self._pomodoro_events()[0]["reason"])
        self.assertTrue(self.ui_server.stopped)

    def test_run_returns_error_code_on_unexpected_failure(self) -> None:
        def failing_hooks(request_stop) -> None:
            del request_stop
            raise RuntimeError("signals unavailable")

        engine = self._engine(setup_signal_handlers=failing_hooks)

        with self.assertLogs("test", level="ERROR"):
            exit_code = engine.run()

        self.assertEqual(1, exit_code)
        self.assertTrue(self.ui_server.stopped)


if __name__ == "__main__":
    unittest.main()
