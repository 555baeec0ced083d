"""Haptic cues rendered as synthesized tones (numpy + QSoundEffect).

A desktop has no vibration motor, so each haptic pattern from the mobile
cue policy is played as a short tone instead.  Tones are generated with
sine-wave synthesis and ADSR envelopes, written as WAV files to the cache
directory, and loaded once into ``QSoundEffect`` instances.

Cue names
---------
- ``tap_light``   soft high tick (time cues above 10 s)
- ``tap_medium``  firmer mid tick (10 s and below)
- ``tap_heavy``   low double thump (3 s and below)
- ``success``     two-note rising chime (item start / complete)
"""

from __future__ import annotations

import io
import logging
import wave
from enum import Enum
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_DATA_DIR

log = logging.getLogger(__name__)


CUES_DIR = APP_DATA_DIR / "cues"
SAMPLE_RATE = 44100


class HapticStyle(Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _envelope(
    length: int,
    attack: int,
    decay: int,
    sustain_level: float,
    release: int,
) -> np.ndarray:
    """ADSR envelope, all durations in samples."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    r_start = max(length - release, d_end)
    if r_start < length:
        env[r_start:] = np.linspace(env[r_start - 1] if r_start else 0.0, 0.0, length - r_start)
    return env


def _tone(freq: float, duration_s: float, amplitude: float) -> np.ndarray:
    t = np.arange(int(SAMPLE_RATE * duration_s)) / SAMPLE_RATE
    return np.sin(2 * np.pi * freq * t) * amplitude


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Float samples in -1..1 → 16-bit mono PCM WAV."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _tap(freq: float, duration_s: float, amplitude: float) -> np.ndarray:
    tone = _tone(freq, duration_s, amplitude)
    return tone * _envelope(len(tone), attack=40, decay=120, sustain_level=0.3, release=len(tone) // 2)


def _generate_tap_light() -> bytes:
    return _to_wav_bytes(np.concatenate([_tap(1400.0, 0.03, 0.2), _silence(0.03)]))


def _generate_tap_medium() -> bytes:
    return _to_wav_bytes(np.concatenate([_tap(900.0, 0.05, 0.35), _silence(0.04)]))


def _generate_tap_heavy() -> bytes:
    thump = _tap(220.0, 0.08, 0.6) + _tap(440.0, 0.08, 0.15)
    return _to_wav_bytes(np.concatenate([thump, _silence(0.06), thump, _silence(0.05)]))


def _generate_success() -> bytes:
    """G5 → C6, short and bright."""
    parts: list[np.ndarray] = []
    for freq in (783.99, 1046.50):
        tone = _tone(freq, 0.11, 0.45)
        parts.append(tone * _envelope(len(tone), attack=80, decay=300, sustain_level=0.4, release=1200))
        parts.append(_silence(0.02))
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "tap_light": _generate_tap_light,
    "tap_medium": _generate_tap_medium,
    "tap_heavy": _generate_tap_heavy,
    "success": _generate_success,
}

CUE_NAMES = tuple(_GENERATORS)

_STYLE_TO_CUE: dict[HapticStyle, str] = {
    HapticStyle.LIGHT: "tap_light",
    HapticStyle.MEDIUM: "tap_medium",
    HapticStyle.HEAVY: "tap_heavy",
}


# ═══════════════════════════════════════════════════════════════════════════
#  HAPTIC PLAYER
# ═══════════════════════════════════════════════════════════════════════════


class HapticPlayer(QObject):
    """Plays haptic cues as tones.

    Usage::

        haptics = HapticPlayer(parent=self)
        haptics.impact(HapticStyle.MEDIUM)
        haptics.notify_success()
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        cues_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7
        self._cues_dir = cues_dir or CUES_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def impact(self, style: HapticStyle) -> None:
        self.play(_STYLE_TO_CUE[style])

    def notify_success(self) -> None:
        self.play("success")

    def play(self, name: str) -> None:
        """Play a cue by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        self._cues_dir.mkdir(parents=True, exist_ok=True)
        for name, generate in _GENERATORS.items():
            path = self._cues_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(generate())
                log.debug("generated cue %s", path)

    def _load_effects(self) -> None:
        for name in CUE_NAMES:
            path = self._cues_dir / f"{name}.wav"
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
