"""Session card: the stretch being done, its countdown, and controls.

Layout (top → bottom):
    - Item counter ("2 / 6")
    - Stretch icon + name, description
    - MM:SS countdown
    - Session progress bar
    - Stop / Start·Pause·Resume / Skip
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame, QProgressBar,
)

from ..timer.session import SessionController


class SessionWidget(QWidget):
    """Displays and drives one ``SessionController``."""

    def __init__(self, controller: SessionController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self._build_ui()
        self._connect_signals()
        self._refresh()

    @property
    def controller(self) -> SessionController:
        return self._controller

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 24)
        layout.setSpacing(10)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._counter_label = QLabel(card)
        self._counter_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._counter_label.setStyleSheet("font-size: 13px; color: #7A7A9A;")
        layout.addWidget(self._counter_label)

        self._name_label = QLabel(card)
        self._name_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._name_label.setStyleSheet("font-size: 22px; font-weight: 700;")
        layout.addWidget(self._name_label)

        self._description_label = QLabel(card)
        self._description_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._description_label.setWordWrap(True)
        layout.addWidget(self._description_label)

        self._time_label = QLabel(card)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet("font-size: 64px; font-weight: 700;")
        layout.addWidget(self._time_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        self._empty_label = QLabel("ストレッチが選択されていません", card)
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._empty_label)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._stop_btn = QPushButton("Stop", card)
        self._stop_btn.setObjectName("dangerButton")
        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._skip_btn = QPushButton("Skip", card)
        self._skip_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._stop_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._skip_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        c = self._controller
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._stop_btn.clicked.connect(c.stop)
        self._skip_btn.clicked.connect(c.skip)

        c.tick.connect(lambda _remaining: self._refresh())
        c.item_changed.connect(lambda _index: self._refresh())
        c.state_changed.connect(self._refresh)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        c = self._controller
        if c.is_session_complete:
            c.restart()
            c.start()
        elif c.is_running:
            c.pause()
        elif c.is_paused:
            c.resume()
        else:
            c.start()

    def _refresh(self) -> None:
        c = self._controller
        has_items = c.total_items > 0
        item = c.current_item

        self._empty_label.setVisible(not has_items)
        self._start_pause_btn.setEnabled(has_items)

        if item is not None:
            self._counter_label.setText(f"{c.current_index + 1} / {c.total_items}")
            self._name_label.setText(f"{item.stretch.icon} {item.stretch.name}")
            self._description_label.setText(item.stretch.description)
        else:
            self._counter_label.setText("")
            self._name_label.setText("")
            self._description_label.setText("")

        if c.is_session_complete:
            self._name_label.setText("お疲れ様でした！")
            self._description_label.setText("")

        minutes, seconds = divmod(c.remaining_seconds, 60)
        self._time_label.setText(f"{minutes:02d}:{seconds:02d}")
        self._progress.setValue(round(c.session_progress * 1000))

        if c.is_session_complete:
            self._start_pause_btn.setText("Again")
        elif c.is_running:
            self._start_pause_btn.setText("Pause")
        elif c.is_paused:
            self._start_pause_btn.setText("Resume")
        else:
            self._start_pause_btn.setText("Start")

        active = c.has_started and not c.is_session_complete
        self._stop_btn.setVisible(c.has_started)
        self._skip_btn.setVisible(active)
