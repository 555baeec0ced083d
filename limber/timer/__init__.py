"""Timer package."""

from .scheduler import ManualScheduler, QtScheduler, ScheduledCall, Scheduler
from .countdown import CountdownTimer, TimerState
from .session import GRACE_SECONDS, SessionController

__all__ = [
    "ManualScheduler",
    "QtScheduler",
    "ScheduledCall",
    "Scheduler",
    "CountdownTimer",
    "TimerState",
    "GRACE_SECONDS",
    "SessionController",
]
