"""Countdown timer state machine.

States
------
IDLE     Not counting.  Either fresh (remaining = configured duration)
         or expired (remaining = 0, ``completed`` already emitted).
RUNNING  Counting down, one tick per interval.
PAUSED   Frozen at the current remaining value.

Transitions
-----------
Any     → RUNNING   (start)
RUNNING → PAUSED    (pause)
PAUSED  → RUNNING   (resume)
RUNNING → IDLE      (remaining reaches 0)
Any     → IDLE      (reset)

Exactly one tick is scheduled at any time.  Every transition cancels the
outstanding tick before scheduling a new one, so tick streams never
overlap and a pause freezes the value even if a tick was already due.
"""

from __future__ import annotations

import logging
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from .scheduler import QtScheduler, ScheduledCall, Scheduler

log = logging.getLogger(__name__)


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class CountdownTimer(QObject):
    """Single-resource countdown with tick and completion signals.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after each decrement that leaves time on the clock.
        Carries the new (post-decrement) value.
    completed()
        Emitted once when the countdown reaches zero.  The final tick
        emits this instead of ``tick``.
    state_changed(new_state: TimerState)
        Emitted on every state transition.
    """

    tick = pyqtSignal(int)
    completed = pyqtSignal()
    state_changed = pyqtSignal(object)

    def __init__(
        self,
        initial_seconds: int,
        *,
        scheduler: Scheduler | None = None,
        interval: float = 1.0,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._initial: int = max(0, int(initial_seconds))
        self._remaining: int = self._initial
        self._run_length: int = self._initial
        self._state: TimerState = TimerState.IDLE
        self._interval = interval
        self._scheduler: Scheduler = scheduler or QtScheduler(self)
        self._pending: ScheduledCall | None = None
        self._disposed = False

    # ── properties ────────────────────────────────────────────────────

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def initial_seconds(self) -> int:
        return self._initial

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state == TimerState.PAUSED

    @property
    def is_expired(self) -> bool:
        return self._state == TimerState.IDLE and self._remaining == 0

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 through the current run."""
        if self._run_length <= 0:
            return 0.0
        elapsed = self._run_length - self._remaining
        return max(0.0, min(1.0, elapsed / self._run_length))

    # ── controls ──────────────────────────────────────────────────────

    def start(self) -> None:
        """Start counting from the current remaining value."""
        if self._disposed:
            return
        self._cancel_tick()
        self._run_length = self._remaining
        self._set_state(TimerState.RUNNING)
        self._schedule_tick()

    def pause(self) -> None:
        if self._state != TimerState.RUNNING:
            return
        self._cancel_tick()
        self._set_state(TimerState.PAUSED)

    def resume(self) -> None:
        if self._state != TimerState.PAUSED or self._disposed:
            return
        self._set_state(TimerState.RUNNING)
        self._schedule_tick()

    def reset(self, new_duration: int | None = None) -> None:
        """Stop and reload.  Without an argument, reloads the initial duration."""
        self._cancel_tick()
        seconds = self._initial if new_duration is None else new_duration
        self._remaining = max(0, int(seconds))
        self._run_length = self._remaining
        self._set_state(TimerState.IDLE)

    def set_duration(self, seconds: int) -> None:
        """Overwrite the remaining value without touching state or schedule."""
        self._remaining = max(0, int(seconds))
        self._run_length = self._remaining

    def dispose(self) -> None:
        """Cancel any pending tick.  Later commands are ignored."""
        self._cancel_tick()
        self._disposed = True

    # ── internal ──────────────────────────────────────────────────────

    def _schedule_tick(self) -> None:
        self._pending = self._scheduler.call_later(self._interval, self._on_tick)

    def _cancel_tick(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _on_tick(self) -> None:
        self._pending = None
        if self._state != TimerState.RUNNING:
            return

        remaining = self._remaining - 1
        if remaining <= 0:
            self._remaining = 0
            self._set_state(TimerState.IDLE)
            self.completed.emit()
            return

        self._remaining = remaining
        # Next tick goes out before listeners run; they may be slow.
        self._schedule_tick()
        self.tick.emit(remaining)

    def _set_state(self, new_state: TimerState) -> None:
        if new_state != self._state:
            log.debug("countdown %s -> %s (%ds)", self._state.value, new_state.value, self._remaining)
        self._state = new_state
        self.state_changed.emit(new_state)
