"""When and what to announce during a stretch session.

The session controller calls these five entry points; this module decides
whether a cue fires, which haptic pattern it uses, and what is spoken.
Actual delivery is delegated to a speaker (``say(text, language)``,
``stop()``) and a haptics player (``impact(style)``, ``notify_success()``).

Cue table
---------
time remaining   only at 60, 30, 10, 5, 4, 3, 2, 1 s.
                 haptic: heavy ≤ 3 s, medium ≤ 10 s, light otherwise.
item start       success haptic + "<name> for <n> seconds".
item complete    success haptic + short acknowledgement.
session complete two success pulses 300 ms apart + congratulations.

Speech and haptics are gated independently by the caller's flags.
Delivery errors are logged and dropped; a missed cue is never retried
because a late cue is worse than none.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..settings import Language
from ..timer.scheduler import QtScheduler, Scheduler
from .sounds import HapticStyle

log = logging.getLogger(__name__)


ANNOUNCE_AT = frozenset({60, 30, 10, 5, 4, 3, 2, 1})
SECOND_PULSE_DELAY = 0.3   # seconds


# ── message helpers ──────────────────────────────────────────────────────


def should_announce(seconds: int) -> bool:
    return seconds in ANNOUNCE_AT


def vibration_for(seconds: int) -> HapticStyle:
    if seconds <= 3:
        return HapticStyle.HEAVY
    if seconds <= 10:
        return HapticStyle.MEDIUM
    return HapticStyle.LIGHT


def time_left_message(seconds: int, language: Language) -> str:
    if Language(language) == Language.JA:
        if seconds >= 60:
            return f"残り{seconds // 60}分"
        return f"残り{seconds}秒"
    if seconds >= 60:
        minutes = seconds // 60
        return f"{minutes} minute{'s' if seconds >= 120 else ''} left"
    return f"{seconds} second{'' if seconds == 1 else 's'} left"


def item_start_message(name: str, duration: int, language: Language) -> str:
    if Language(language) == Language.JA:
        return f"{name}を{duration}秒間行います"
    return f"{name} for {duration} seconds"


def item_complete_message(language: Language) -> str:
    return "完了です！" if Language(language) == Language.JA else "Complete!"


def session_complete_message(language: Language) -> str:
    if Language(language) == Language.JA:
        return "ストレッチセッション完了です！お疲れ様でした！"
    return "Stretch session complete! Great job!"


# ── announcer ────────────────────────────────────────────────────────────


class CueAnnouncer:
    """Notification capability consumed by ``SessionController``."""

    def __init__(self, speaker, haptics, *, scheduler: Scheduler | None = None) -> None:
        self._speaker = speaker
        self._haptics = haptics
        self._scheduler = scheduler or QtScheduler()

    def announce_time(
        self,
        remaining: int,
        use_speech: bool,
        use_vibration: bool,
        language: Language,
    ) -> bool:
        """Announce time left.  Returns False for off-schedule values."""
        if not should_announce(remaining):
            return False
        if use_vibration:
            self._guard("vibrate", self._haptics.impact, vibration_for(remaining))
        if use_speech:
            self._speak(time_left_message(remaining, language), language)
        return True

    def announce_item_start(
        self,
        name: str,
        duration: int,
        use_speech: bool,
        use_vibration: bool,
        language: Language,
    ) -> None:
        if use_vibration:
            self._guard("vibrate", self._haptics.notify_success)
        if use_speech:
            self._speak(item_start_message(name, duration, language), language)

    def announce_item_complete(
        self,
        use_speech: bool,
        use_vibration: bool,
        language: Language,
    ) -> None:
        if use_vibration:
            self._guard("vibrate", self._haptics.notify_success)
        if use_speech:
            self._speak(item_complete_message(language), language)

    def announce_session_complete(
        self,
        use_speech: bool,
        use_vibration: bool,
        language: Language,
    ) -> None:
        if use_vibration:
            self._guard("vibrate", self._haptics.notify_success)
            self._scheduler.call_later(
                SECOND_PULSE_DELAY,
                lambda: self._guard("vibrate", self._haptics.notify_success),
            )
        if use_speech:
            self._speak(session_complete_message(language), language)

    def cancel_announcement(self) -> None:
        self._guard("stop speech", self._speaker.stop)

    # ── internal ──────────────────────────────────────────────────────

    def _speak(self, text: str, language: Language) -> None:
        self._guard("speech", self._speaker.say, text, Language(language))

    @staticmethod
    def _guard(what: str, fn: Callable, *args) -> None:
        try:
            fn(*args)
        except Exception:
            log.warning("%s cue failed", what, exc_info=True)
