"""UI package."""

from .session_widget import SessionWidget
from .preferences_dialog import PreferencesDialog
from .history_panel import HistoryPanel

__all__ = ["SessionWidget", "PreferencesDialog", "HistoryPanel"]
