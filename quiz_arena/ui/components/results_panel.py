"""Component showing the outcome of a finished quiz."""

from __future__ import annotations

from html import escape
from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from quiz_arena.constants.ui_constants import (
    HOME_BUTTON,
    OPTION_LETTERS,
    SKIPPED_ANSWER_TEXT,
    TRY_AGAIN_BUTTON,
)
from quiz_arena.core.markdown_renderer import renderer
from quiz_arena.core.models import SessionState
from quiz_arena.core.scoring import QuizSummary
from quiz_arena.styling.styles import Styles


class ResultsPanel(QWidget):
    """Grade, statistics and a per-question review."""

    def __init__(
        self,
        on_try_again: Callable[[], None],
        on_home: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_try_again = on_try_again
        self.on_home = on_home
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.grade_label = QLabel("", self)
        self.grade_label.setAlignment(Qt.AlignCenter)
        self.grade_label.setStyleSheet("font-size: 36pt; font-weight: bold;")
        layout.addWidget(self.grade_label)

        self.score_label = QLabel("", self)
        self.score_label.setAlignment(Qt.AlignCenter)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.score_label)

        stats_row = QHBoxLayout()
        self.stat_labels: dict[str, QLabel] = {}
        for key in ("Correct", "Wrong", "Skipped", "Best Streak", "Points"):
            label = QLabel("", self)
            label.setAlignment(Qt.AlignCenter)
            stats_row.addWidget(label)
            self.stat_labels[key] = label
        layout.addLayout(stats_row)

        self.review_view = QTextBrowser(self)
        layout.addWidget(self.review_view, stretch=1)

        button_row = QHBoxLayout()
        button_row.addStretch()
        try_again_button = QPushButton(TRY_AGAIN_BUTTON, self)
        try_again_button.clicked.connect(self.on_try_again)
        button_row.addWidget(try_again_button)
        home_button = QPushButton(HOME_BUTTON, self)
        home_button.clicked.connect(self.on_home)
        button_row.addWidget(home_button)
        layout.addLayout(button_row)

    def show_results(self, summary: QuizSummary, state: SessionState) -> None:
        self.grade_label.setText(summary.grade)
        self.score_label.setText(
            f"You scored {summary.score} / {summary.total} ({summary.percentage}%)"
        )
        values = {
            "Correct": summary.score,
            "Wrong": summary.wrong_count,
            "Skipped": summary.skipped_count,
            "Best Streak": summary.best_streak,
            "Points": summary.points,
        }
        for key, label in self.stat_labels.items():
            label.setText(f"{values[key]}\n{key}")
        self.review_view.setHtml(self._review_html(state))

    @staticmethod
    def _review_html(state: SessionState) -> str:
        items: list[str] = []
        for number, (question, answer) in enumerate(zip(state.questions, state.answers), start=1):
            if answer.skipped:
                icon, selected_text = "⏭", SKIPPED_ANSWER_TEXT
            else:
                icon = "✅" if answer.correct else "❌"
                letter = OPTION_LETTERS[answer.selected]
                selected_text = f"Your answer: {letter}. {escape(question.options[answer.selected])}"
            correct_letter = OPTION_LETTERS[question.correct_answer]
            correct_text = f"Correct: {correct_letter}. {escape(question.options[question.correct_answer])}"
            items.append(
                f"<h4>{icon} {number}. {renderer.render_inline(question.question)}</h4>"
                f"<p>{selected_text}<br/><b>{correct_text}</b></p>"
                f"{renderer.render_fragment(question.explanation) if question.explanation else ''}"
            )
        return "<html><body>" + "<hr/>".join(items) + "</body></html>"
