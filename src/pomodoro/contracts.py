"""Protocols for the side-effect collaborators driven by the pomodoro timer."""

from __future__ import annotations

from typing import Protocol


class NotifierLike(Protocol):
    """Desktop notification capability with a one-time permission prompt."""
    @property
    def permission(self) -> str:
        ...

    def request_permission(self) -> str:
        ...

    def notify(self, title: str, body: str) -> None:
        ...


class TonePlayerLike(Protocol):
    """Fire-and-forget completion tone at a 0-100 volume."""
    def play(self, volume: int) -> None:
        ...
