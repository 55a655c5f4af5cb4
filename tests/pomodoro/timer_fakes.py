"""Deterministic collaborators shared by the pomodoro timer tests."""

from __future__ import annotations

from pomodoro import PomodoroTimer, TimerSettings
from runtime.scheduler import Scheduler


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class RecordingNotifier:
    def __init__(self, answer: str = "granted", permission: str = "granted"):
        self.permission = permission
        self._answer = answer
        self.requests = 0
        self.shown: list[tuple[str, str]] = []

    def request_permission(self) -> str:
        self.requests += 1
        if self.permission == "default":
            self.permission = self._answer
        return self.permission

    def notify(self, title: str, body: str) -> None:
        self.shown.append((title, body))


class RecordingTonePlayer:
    def __init__(self, error: Exception | None = None):
        self.volumes: list[int] = []
        self._error = error

    def play(self, volume: int) -> None:
        self.volumes.append(volume)
        if self._error is not None:
            raise self._error


class TimerHarness:
    def __init__(self, settings: TimerSettings | None = None, **timer_kwargs):
        self.clock = FakeClock()
        self.scheduler = Scheduler(clock=self.clock)
        self.notifier = timer_kwargs.pop("notifier", RecordingNotifier())
        self.tone_player = timer_kwargs.pop("tone_player", RecordingTonePlayer())
        self.ticks = []
        self.timer = PomodoroTimer(
            scheduler=self.scheduler,
            settings=settings,
            notifier=self.notifier,
            tone_player=self.tone_player,
            listener=self.ticks.append,
            **timer_kwargs,
        )

    def advance(self, seconds: float, step: float = 1.0) -> None:
        elapsed = 0.0
        while elapsed < seconds:
            increment = min(step, seconds - elapsed)
            self.clock.now += increment
            elapsed += increment
            self.scheduler.run_due()

    def advance_until(self, predicate, limit_seconds: int = 20000) -> None:
        for _ in range(limit_seconds):
            if predicate(self.timer.snapshot()):
                return
            self.advance(1.0)
        raise AssertionError("condition not reached within limit")
