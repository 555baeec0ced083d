"""Preferences dialog for Limber.

Edits the ``Preferences`` object in place and saves on every change, so
a running session picks up new cue settings at its next announcement.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QCheckBox, QComboBox, QSlider, QLabel, QPushButton, QWidget,
)

from ..catalog.stretches import DURATION_OPTIONS, format_duration
from ..settings import Language, Preferences, save_preferences


LANGUAGE_LABELS: dict[Language, str] = {
    Language.JA: "日本語",
    Language.EN: "English",
}


class PreferencesDialog(QDialog):
    """Modal dialog for cue and timer preferences."""

    def __init__(
        self,
        prefs: Preferences,
        parent: QWidget | None = None,
        *,
        volume_changed: Callable[[int], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.setMinimumWidth(380)
        self.setModal(True)

        self._prefs = prefs
        self._volume_changed = volume_changed

        self._build_ui()
        self._populate()
        self._connect_signals()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        form = QFormLayout()
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._speech_cb = QCheckBox("Voice announcements")
        form.addRow("", self._speech_cb)

        self._vibration_cb = QCheckBox("Cue tones")
        form.addRow("", self._vibration_cb)

        self._language_combo = QComboBox()
        for language, label in LANGUAGE_LABELS.items():
            self._language_combo.addItem(label, language.value)
        form.addRow("Language:", self._language_combo)

        self._duration_combo = QComboBox()
        for seconds in DURATION_OPTIONS:
            self._duration_combo.addItem(format_duration(seconds), seconds)
        form.addRow("Default duration:", self._duration_combo)

        vol_row = QHBoxLayout()
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_label = QLabel()
        self._vol_label.setMinimumWidth(36)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)
        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        form.addRow("Volume:", vol_wrapper)

        root.addLayout(form)
        root.addStretch()

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    def _populate(self) -> None:
        p = self._prefs
        self._speech_cb.setChecked(p.use_speech)
        self._vibration_cb.setChecked(p.use_vibration)
        self._language_combo.setCurrentIndex(
            max(0, self._language_combo.findData(p.speech_language.value))
        )
        index = self._duration_combo.findData(p.default_duration)
        if index < 0:
            self._duration_combo.addItem(format_duration(p.default_duration), p.default_duration)
            index = self._duration_combo.count() - 1
        self._duration_combo.setCurrentIndex(index)
        self._vol_slider.setValue(p.cue_volume)
        self._vol_label.setText(f"{p.cue_volume}%")

    def _connect_signals(self) -> None:
        self._speech_cb.toggled.connect(self._on_changed)
        self._vibration_cb.toggled.connect(self._on_changed)
        self._language_combo.currentIndexChanged.connect(self._on_changed)
        self._duration_combo.currentIndexChanged.connect(self._on_changed)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)

    # ── change handlers: save immediately ──────────────────────────────────────────────────────────────

    def _on_changed(self) -> None:
        p = self._prefs
        p.use_speech = self._speech_cb.isChecked()
        p.use_vibration = self._vibration_cb.isChecked()
        p.speech_language = Language(self._language_combo.currentData())
        p.default_duration = int(self._duration_combo.currentData())
        save_preferences(p)

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        self._prefs.cue_volume = value
        save_preferences(self._prefs)
        if self._volume_changed is not None:
            self._volume_changed(value)

    @property
    def preferences(self) -> Preferences:
        return self._prefs
