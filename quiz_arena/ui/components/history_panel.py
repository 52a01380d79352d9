"""Component listing previously completed quizzes."""

from __future__ import annotations

from PySide6.QtWidgets import QLabel, QListWidget, QVBoxLayout, QWidget

from quiz_arena.constants.ui_constants import DIFFICULTY_LABELS, NO_HISTORY_MESSAGE
from quiz_arena.core.services.result_history import ResultHistory
from quiz_arena.styling.styles import Styles


class HistoryPanel(QWidget):
    """Most recent results first, with the best run per difficulty."""

    def __init__(self, history: ResultHistory, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.history = history
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title = QLabel("History", self)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        self.best_label = QLabel("", self)
        layout.addWidget(self.best_label)

        self.entry_list = QListWidget(self)
        layout.addWidget(self.entry_list, stretch=1)

    def refresh(self) -> None:
        self.entry_list.clear()
        entries = self.history.entries()
        if not entries:
            self.best_label.setText(NO_HISTORY_MESSAGE)
            return

        best_parts = []
        for tier, label in DIFFICULTY_LABELS.items():
            best = self.history.best_for(tier)
            if best is not None:
                best_parts.append(f"{label}: {best.summary.grade} ({best.summary.percentage}%)")
        self.best_label.setText("Best: " + " · ".join(best_parts))

        for entry in entries:
            summary = entry.summary
            recorded = entry.recorded_at.astimezone().strftime("%Y-%m-%d %H:%M")
            self.entry_list.addItem(
                f"{recorded}  {DIFFICULTY_LABELS[summary.difficulty.value]:<6}  "
                f"{summary.score}/{summary.total} ({summary.percentage}%)  {summary.grade}  "
                f"best streak {summary.best_streak}"
            )
