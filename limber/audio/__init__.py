"""Cue policy and delivery (speech + haptic tones)."""

from .cues import CueAnnouncer, ANNOUNCE_AT
from .sounds import HapticPlayer, HapticStyle

__all__ = ["CueAnnouncer", "ANNOUNCE_AT", "HapticPlayer", "HapticStyle"]
