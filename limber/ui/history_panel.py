"""History panel: streak summary plus the most recent sessions."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel

from ..history import calculate_stats, format_duration_display, load_history

RECENT_LIMIT = 5


class HistoryPanel(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._row_widgets: list[QWidget] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 0)
        layout.setSpacing(6)

        self._summary_label = QLabel(self)
        self._summary_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._summary_label.setStyleSheet("font-size: 13px; font-weight: 600;")
        layout.addWidget(self._summary_label)

        self._rows_container = QVBoxLayout()
        self._rows_container.setSpacing(4)
        layout.addLayout(self._rows_container)

        self._empty_label = QLabel("まだ記録がありません", self)
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._empty_label)

    def refresh(self) -> None:
        """Reload stats and recent sessions from the database."""
        for w in self._row_widgets:
            w.setParent(None)
            w.deleteLater()
        self._row_widgets.clear()

        records = load_history()
        stats = calculate_stats(records)
        self._summary_label.setText(
            f"🔥 {stats.current_streak}日連続 · 最長 {stats.longest_streak}日 · "
            f"{stats.total_sessions}回 · {format_duration_display(stats.total_duration)}"
        )

        self._empty_label.setVisible(not records)
        for record in records[:RECENT_LIMIT]:
            row = self._make_row(record)
            self._rows_container.addWidget(row)
            self._row_widgets.append(row)

    def _make_row(self, record) -> QWidget:
        row = QWidget(self)
        layout = QHBoxLayout(row)
        layout.setContentsMargins(8, 2, 8, 2)

        name = QLabel(record.routine_name or f"{record.stretch_count}種目", row)
        when = QLabel(record.completed_at.strftime("%m/%d %H:%M"), row)
        when.setStyleSheet("color: #7A7A9A;")
        dur = QLabel(format_duration_display(record.duration_seconds), row)
        dur.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)

        layout.addWidget(name, 1)
        layout.addWidget(when)
        layout.addWidget(dur)
        return row

    @property
    def row_count(self) -> int:
        return len(self._row_widgets)
