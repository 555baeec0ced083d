"""Deferred execution for the timer layer.

Both the per-second countdown tick and the one-shot grace delay between
stretches go through ``Scheduler.call_later``.  Every call returns a
``ScheduledCall`` handle, so teardown is the same for both: cancel the
handle.

Implementations
---------------
QtScheduler      Real time, single-shot ``QTimer`` on the Qt event loop.
ManualScheduler  Virtual clock.  Nothing runs until ``advance()`` is called,
                 which lets tests step through minutes of session in
                 microseconds.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


class ScheduledCall(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


# ── Qt ────────────────────────────────────────────────────────────────────


class _QtCall:
    """Handle around one single-shot QTimer."""

    def __init__(self, owner: QtScheduler, timer: QTimer, callback: Callable[[], None]) -> None:
        self._owner = owner
        self._timer = timer
        self._callback = callback
        timer.timeout.connect(self._fire)

    @property
    def active(self) -> bool:
        return self._timer is not None

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._release()

    def _fire(self) -> None:
        if self._timer is None:
            return
        callback = self._callback
        self._release()
        callback()

    def _release(self) -> None:
        timer, self._timer = self._timer, None
        self._callback = None
        self._owner._calls.discard(self)
        timer.deleteLater()


class QtScheduler(QObject):
    """Schedules callbacks on the running Qt event loop."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._calls: set[_QtCall] = set()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _QtCall:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(max(0, round(delay * 1000)))
        call = _QtCall(self, timer, callback)
        self._calls.add(call)
        timer.start()
        return call

    @property
    def pending(self) -> int:
        return len(self._calls)

    def cancel_all(self) -> None:
        for call in list(self._calls):
            call.cancel()


# ── virtual clock ─────────────────────────────────────────────────────────


class _ManualCall:
    __slots__ = ("due", "callback", "active")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        self.active = False


class ManualScheduler:
    """Deterministic scheduler driven by explicit ``advance()`` calls.

    Usage::

        clock = ManualScheduler()
        timer = CountdownTimer(30, scheduler=clock)
        timer.start()
        clock.advance(30)   # fires 29 ticks and one completion
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, _ManualCall]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if call.active)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualCall:
        call = _ManualCall(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (call.due, next(self._seq), call))
        return call

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running everything that falls due."""
        deadline = self._now + seconds
        while self._queue and self._queue[0][0] <= deadline:
            due, _, call = heapq.heappop(self._queue)
            if not call.active:
                continue
            self._now = due
            call.active = False
            call.callback()
        self._now = deadline

    def run_pending(self) -> bool:
        """Advance straight to the next active call.  False if none."""
        self._drop_cancelled()
        if not self._queue:
            return False
        self.advance(self._queue[0][0] - self._now)
        return True

    def cancel_all(self) -> None:
        for _, _, call in self._queue:
            call.cancel()
        self._queue.clear()

    def _drop_cancelled(self) -> None:
        while self._queue and not self._queue[0][2].active:
            heapq.heappop(self._queue)
