"""Runtime engine exports."""

from .loop import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from .scheduler import ScheduledCall, Scheduler

__all__ = [
    "RuntimeBootstrap",
    "RuntimeEngine",
    "RuntimeHooks",
    "ScheduledCall",
    "Scheduler",
]
