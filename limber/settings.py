"""User preferences with JSON persistence.

Preferences are stored at:
    $LIMBER_HOME/preferences.json   (default ~/.local/share/limber)

Usage::

    prefs = load_preferences()
    prefs.use_speech = False
    save_preferences(prefs)

The session controller reads preferences through a getter on every
announcement, so edits made in place (the preferences dialog does this)
take effect mid-session.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from enum import Enum
from pathlib import Path

log = logging.getLogger(__name__)


APP_DATA_DIR = Path(
    os.environ.get("LIMBER_HOME", Path.home() / ".local" / "share" / "limber")
)
PREFERENCES_PATH = APP_DATA_DIR / "preferences.json"


class Language(str, Enum):
    JA = "ja"
    EN = "en"


@dataclass
class Preferences:
    """All user-configurable preferences."""

    # ── cues ──────────────────────────────────────────────────────────
    use_speech: bool = True
    use_vibration: bool = True
    speech_language: Language = Language.JA

    # ── timer ─────────────────────────────────────────────────────────
    default_duration: int = 45             # seconds, used when no item is loaded

    # ── desktop ───────────────────────────────────────────────────────
    cue_volume: int = 70                   # 0-100
    window_width: int = 480
    window_height: int = 640

    def __post_init__(self) -> None:
        self.speech_language = Language(self.speech_language)


def load_preferences() -> Preferences:
    """Load preferences from disk, falling back to defaults."""
    if not PREFERENCES_PATH.exists():
        return Preferences()
    try:
        data = json.loads(PREFERENCES_PATH.read_text(encoding="utf-8"))
        valid_keys = {f.name for f in fields(Preferences)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Preferences(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        log.warning("Unreadable preferences at %s, using defaults", PREFERENCES_PATH, exc_info=True)
        return Preferences()


def save_preferences(prefs: Preferences) -> None:
    """Write preferences to disk as JSON."""
    APP_DATA_DIR.mkdir(parents=True, exist_ok=True)
    PREFERENCES_PATH.write_text(
        json.dumps(asdict(prefs), indent=2) + "\n",
        encoding="utf-8",
    )
