"""Spoken cues through Qt's text-to-speech engine."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QLocale, QObject
from PyQt6.QtTextToSpeech import QTextToSpeech

from ..settings import Language

log = logging.getLogger(__name__)


LOCALES: dict[Language, QLocale] = {
    Language.JA: QLocale("ja_JP"),
    Language.EN: QLocale("en_US"),
}

SPEECH_RATE = -0.1   # -1.0 .. 1.0, slightly slower than normal
SPEECH_PITCH = 0.0


class Speaker(QObject):
    """Speaks short phrases, one at a time.

    A new ``say()`` interrupts whatever is being spoken.  ``stop()`` is
    safe to call when nothing is playing.
    """

    def __init__(self, parent: QObject | None = None, *, engine=None) -> None:
        super().__init__(parent)
        self._engine = engine if engine is not None else QTextToSpeech(self)
        self._engine.setRate(SPEECH_RATE)
        self._engine.setPitch(SPEECH_PITCH)
        self._language: Language | None = None

    def say(self, text: str, language: Language) -> None:
        language = Language(language)
        if language != self._language:
            self._engine.setLocale(LOCALES[language])
            self._language = language
        log.debug("say [%s] %s", language.value, text)
        self._engine.say(text)

    def stop(self) -> None:
        self._engine.stop()
