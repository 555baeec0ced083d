"""Main window: routine picker, session card, history."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QComboBox,
)

from .audio.cues import CueAnnouncer
from .audio.sounds import HapticPlayer
from .audio.speech import Speaker
from .catalog.presets import PRESET_ROUTINES, format_routine_duration, routine_duration
from .history import record_session
from .routines import load_routines
from .settings import Preferences, load_preferences, save_preferences
from .timer.scheduler import Scheduler
from .timer.session import SessionController
from .ui.history_panel import HistoryPanel
from .ui.preferences_dialog import PreferencesDialog
from .ui.session_widget import SessionWidget

log = logging.getLogger(__name__)


class LimberApp(QMainWindow):
    def __init__(
        self,
        prefs: Preferences | None = None,
        *,
        announcer=None,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Limber")
        self._prefs = prefs or load_preferences()
        self.resize(self._prefs.window_width, self._prefs.window_height)

        if announcer is None:
            haptics = HapticPlayer(self)
            haptics.set_volume(self._prefs.cue_volume)
            self._haptics: HapticPlayer | None = haptics
            announcer = CueAnnouncer(Speaker(self), haptics)
        else:
            self._haptics = None
        self._announcer = announcer
        self._scheduler = scheduler

        self._routines: list[tuple[str, tuple]] = []
        self._controller: SessionController | None = None
        self._session_widget: SessionWidget | None = None

        self._build_ui()
        self._build_menu()
        self._load_routine_choices()
        self._history.refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        central = QWidget(self)
        self._layout = QVBoxLayout(central)
        self._layout.setContentsMargins(16, 16, 16, 16)
        self._layout.setSpacing(12)

        self._routine_combo = QComboBox(central)
        self._routine_combo.currentIndexChanged.connect(self._on_routine_selected)
        self._layout.addWidget(self._routine_combo)

        self._session_slot = QVBoxLayout()
        self._layout.addLayout(self._session_slot)

        self._history = HistoryPanel(central)
        self._layout.addWidget(self._history)
        self._layout.addStretch()

        self.setCentralWidget(central)

    def _build_menu(self) -> None:
        prefs_action = QAction("Preferences…", self)
        prefs_action.setShortcut(QKeySequence.StandardKey.Preferences)
        prefs_action.triggered.connect(self._open_preferences)
        self.menuBar().addMenu("Limber").addAction(prefs_action)

    def _load_routine_choices(self) -> None:
        self._routines = [
            (f"{r.icon} {r.name}", r.items) for r in PRESET_ROUTINES
        ] + [
            (f"⭐ {r.name}", r.items) for r in load_routines()
        ]
        self._routine_combo.blockSignals(True)
        self._routine_combo.clear()
        for label, items in self._routines:
            duration = format_routine_duration(routine_duration(items))
            self._routine_combo.addItem(f"{label} ({duration})")
        self._routine_combo.blockSignals(False)
        self._on_routine_selected(self._routine_combo.currentIndex())

    # ── session management ───────────────────────────────────────────────

    @property
    def controller(self) -> SessionController | None:
        return self._controller

    def _on_routine_selected(self, index: int) -> None:
        label, items = self._routines[index] if 0 <= index < len(self._routines) else ("", ())
        self._discard_session()

        controller = SessionController(
            items,
            lambda: self._prefs,
            self._announcer,
            on_session_complete=lambda: self._on_session_complete(label, items),
            scheduler=self._scheduler,
            parent=self,
        )
        self._controller = controller
        self._session_widget = SessionWidget(controller, self)
        self._session_slot.addWidget(self._session_widget)
        log.debug("loaded routine %r (%d items)", label, len(items))

    def _discard_session(self) -> None:
        if self._controller is not None:
            self._controller.close()
            self._controller.deleteLater()
            self._controller = None
        if self._session_widget is not None:
            self._session_widget.setParent(None)
            self._session_widget.deleteLater()
            self._session_widget = None

    def _on_session_complete(self, label: str, items) -> None:
        record_session(items, routine_name=label or None)
        self._history.refresh()

    # ── preferences ──────────────────────────────────────────────────────

    def _open_preferences(self) -> None:
        dialog = PreferencesDialog(self._prefs, self, volume_changed=self._on_volume_changed)
        dialog.exec()

    def _on_volume_changed(self, value: int) -> None:
        if self._haptics is not None:
            self._haptics.set_volume(value)

    # ── window events ────────────────────────────────────────────────────

    def closeEvent(self, event) -> None:
        self._discard_session()
        self._prefs.window_width = self.width()
        self._prefs.window_height = self.height()
        save_preferences(self._prefs)
        super().closeEvent(event)
