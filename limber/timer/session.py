"""Stretch-session controller: sequences items through one countdown.

Lifecycle
---------
ready      Not started.  Timer loaded with the first item's duration
           (or the preference fallback when the list is empty).
active     ``start()`` → items play in order.  Each expiry announces a
           short "complete" cue, waits a grace interval, then loads and
           starts the next item.
complete   Last item expired (or skipped).  Terminal until
           ``restart()`` / ``stop()``.
closed     ``close()`` → schedule and pending advance cancelled; every
           command is ignored from then on.

Preferences are read through a getter at every announcement, never
cached, so changes made mid-session apply to the very next cue.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence, Union

from PyQt6.QtCore import QObject, pyqtSignal

from ..catalog.stretches import SessionItem
from ..settings import Preferences
from .countdown import CountdownTimer
from .scheduler import QtScheduler, ScheduledCall, Scheduler

log = logging.getLogger(__name__)


GRACE_SECONDS = 1.5

PreferenceSource = Union[Preferences, Callable[[], Preferences]]


class SessionController(QObject):
    """Drives a list of timed stretches through a ``CountdownTimer``.

    Signals
    -------
    tick(remaining_seconds: int)
        Forwarded from the countdown on every tick.
    item_changed(index: int)
        The current item changed (advance, skip, restart, stop).
    state_changed()
        Any run/pause/complete flag may have changed.
    session_completed()
        The session finished.  Emitted once per session, together with
        the ``on_session_complete`` callback.
    """

    tick = pyqtSignal(int)
    item_changed = pyqtSignal(int)
    state_changed = pyqtSignal()
    session_completed = pyqtSignal()

    def __init__(
        self,
        items: Sequence[SessionItem],
        preferences: PreferenceSource,
        announcer,
        *,
        on_session_complete: Callable[[], None] | None = None,
        scheduler: Scheduler | None = None,
        grace_seconds: float = GRACE_SECONDS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._items: tuple[SessionItem, ...] = tuple(items)
        if callable(preferences):
            self._preferences = preferences
        else:
            self._preferences = lambda: preferences
        self._announcer = announcer
        self._on_session_complete = on_session_complete
        self._scheduler: Scheduler = scheduler or QtScheduler(self)
        self._grace_seconds = grace_seconds

        self._index = 0
        self._has_started = False
        self._complete = False
        self._completion_fired = False
        self._closed = False

        self._pending_advance: ScheduledCall | None = None
        self._advance_held = False

        self._timer = CountdownTimer(
            self._initial_duration(),
            scheduler=self._scheduler,
            parent=self,
        )
        self._timer.tick.connect(self._on_tick)
        self._timer.completed.connect(self._on_item_expired)
        self._timer.state_changed.connect(lambda _state: self.state_changed.emit())

    # ══════════════════════════════════════════════════════════════════
    #  DERIVED STATE
    # ══════════════════════════════════════════════════════════════════

    @property
    def items(self) -> tuple[SessionItem, ...]:
        return self._items

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_item(self) -> SessionItem | None:
        if 0 <= self._index < len(self._items):
            return self._items[self._index]
        return None

    @property
    def remaining_seconds(self) -> int:
        if not self._items:
            return self._preferences().default_duration
        return self._timer.remaining_seconds

    @property
    def is_running(self) -> bool:
        return self._timer.is_running

    @property
    def is_paused(self) -> bool:
        if self._complete:
            return False
        return self._timer.is_paused or self._advance_held

    @property
    def is_session_complete(self) -> bool:
        return self._complete

    @property
    def has_started(self) -> bool:
        return self._has_started

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def total_items(self) -> int:
        return len(self._items)

    @property
    def total_duration(self) -> int:
        return sum(item.duration for item in self._items)

    @property
    def item_progress(self) -> float:
        """0.0 → 1.0 through the current item."""
        if self._complete:
            return 1.0
        item = self.current_item
        if item is None or not self._has_started:
            return 0.0
        elapsed = item.duration - self._timer.remaining_seconds
        return max(0.0, min(1.0, elapsed / item.duration))

    @property
    def session_progress(self) -> float:
        """0.0 → 1.0 through the whole list, weighted by duration."""
        total = self.total_duration
        if total <= 0:
            return 0.0
        if self._complete:
            return 1.0
        if not self._has_started:
            return 0.0
        done = sum(item.duration for item in self._items[: self._index])
        item = self.current_item
        if item is not None:
            done += item.duration - self._timer.remaining_seconds
        return max(0.0, min(1.0, done / total))

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin at the first item.  No-op for an empty list."""
        if self._closed or not self._items:
            return
        self._cancel_pending_advance()
        self._has_started = True
        self._complete = False
        self._completion_fired = False
        self._set_index(0)
        log.info("session started: %d items, %ds", len(self._items), self.total_duration)
        self._play_current()

    def pause(self) -> None:
        if self._closed or self._complete:
            return
        self._timer.pause()
        if self._pending_advance is not None:
            # Hold the grace-interval advance until resume().
            self._cancel_pending_advance()
            self._advance_held = True
            self.state_changed.emit()
        self._notify("cancel_announcement")

    def resume(self) -> None:
        if self._closed or self._complete:
            return
        if self._advance_held:
            self._advance_held = False
            self._advance()
            return
        self._timer.resume()

    def skip(self) -> None:
        """Jump to the next item, or finish the session from the last one."""
        if self._closed or not self._has_started or self._complete:
            return
        self._notify("cancel_announcement")
        self._cancel_pending_advance()
        if self._index >= len(self._items) - 1:
            # Stop ticking but keep the frozen value on display.
            self._timer.reset(self._timer.remaining_seconds)
            self._finish_session()
            return
        self._set_index(self._index + 1)
        self._play_current()

    def restart(self) -> None:
        """Back to the first item, ready but not running."""
        if self._closed:
            return
        self._notify("cancel_announcement")
        self._reset_to_ready()

    def stop(self) -> None:
        if self._closed:
            return
        self._notify("cancel_announcement")
        self._timer.pause()
        self._reset_to_ready()

    def close(self) -> None:
        """Tear down.  Cancels ticking, any pending advance, and speech."""
        if self._closed:
            return
        self._cancel_pending_advance()
        self._timer.dispose()
        self._notify("cancel_announcement")
        self._closed = True
        log.debug("session controller closed")

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer wiring
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self, remaining: int) -> None:
        prefs = self._preferences()
        self._notify(
            "announce_time",
            remaining, prefs.use_speech, prefs.use_vibration, prefs.speech_language,
        )
        self.tick.emit(remaining)

    def _on_item_expired(self) -> None:
        if self._closed:
            return
        if self._index >= len(self._items) - 1:
            self._finish_session()
            return

        prefs = self._preferences()
        self._notify(
            "announce_item_complete",
            prefs.use_speech, prefs.use_vibration, prefs.speech_language,
        )
        self._pending_advance = self._scheduler.call_later(self._grace_seconds, self._on_grace_elapsed)

    def _on_grace_elapsed(self) -> None:
        self._pending_advance = None
        self._advance()

    def _advance(self) -> None:
        if self._closed or not self._items or not self._has_started or self._complete:
            return
        if self._index >= len(self._items) - 1:
            return
        self._set_index(self._index + 1)
        self._play_current()

    def _play_current(self) -> None:
        """Announce the current item, then load and start its countdown."""
        item = self.current_item
        if item is None:
            return
        prefs = self._preferences()
        self._notify(
            "announce_item_start",
            item.stretch.name, item.duration,
            prefs.use_speech, prefs.use_vibration, prefs.speech_language,
        )
        self._timer.reset(item.duration)
        self._timer.start()

    def _finish_session(self) -> None:
        self._complete = True
        self.state_changed.emit()
        if self._completion_fired:
            return
        self._completion_fired = True
        log.info("session complete")
        prefs = self._preferences()
        self._notify(
            "announce_session_complete",
            prefs.use_speech, prefs.use_vibration, prefs.speech_language,
        )
        if self._on_session_complete is not None:
            self._on_session_complete()
        self.session_completed.emit()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: helpers
    # ══════════════════════════════════════════════════════════════════

    def _reset_to_ready(self) -> None:
        self._cancel_pending_advance()
        self._has_started = False
        self._complete = False
        self._completion_fired = False
        self._timer.reset(self._initial_duration())
        self._set_index(0)
        self.state_changed.emit()

    def _initial_duration(self) -> int:
        if self._items:
            return self._items[0].duration
        return self._preferences().default_duration

    def _set_index(self, index: int) -> None:
        changed = index != self._index
        self._index = index
        if changed or self._has_started:
            self.item_changed.emit(index)

    def _cancel_pending_advance(self) -> None:
        self._advance_held = False
        if self._pending_advance is not None:
            self._pending_advance.cancel()
            self._pending_advance = None

    def _notify(self, method: str, *args) -> None:
        """Fire-and-forget call into the announcer.  Never raises."""
        try:
            getattr(self._announcer, method)(*args)
        except Exception:
            log.warning("announcer.%s failed", method, exc_info=True)
