"""Component for choosing the difficulty of a new quiz."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_arena.constants.quiz_constants import QUESTION_COUNT
from quiz_arena.constants.ui_constants import (
    DIFFICULTY_DESCRIPTIONS,
    DIFFICULTY_LABELS,
    START_BUTTON,
)
from quiz_arena.core.models import Difficulty
from quiz_arena.core.quiz_manager import QuizManager
from quiz_arena.styling.styles import Styles


class DifficultyPanel(QWidget):
    """One card per difficulty tier, each with its own start button."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_start_quiz: Callable[[Difficulty], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_start_quiz = on_start_quiz
        self._detail_labels: dict[Difficulty, QLabel] = {}
        self._start_buttons: dict[Difficulty, QPushButton] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title = QLabel("Select Difficulty", self)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        self.catalog_label = QLabel("", self)
        layout.addWidget(self.catalog_label)

        card_row = QHBoxLayout()
        for tier in Difficulty:
            card_row.addWidget(self._build_card(tier))
        layout.addLayout(card_row)
        layout.addStretch()

    def _build_card(self, tier: Difficulty) -> QGroupBox:
        card = QGroupBox(DIFFICULTY_LABELS[tier.value], self)
        card_layout = QVBoxLayout()
        card.setLayout(card_layout)

        description = QLabel(DIFFICULTY_DESCRIPTIONS[tier.value], card)
        description.setWordWrap(True)
        card_layout.addWidget(description)

        details = QLabel("", card)
        details.setAlignment(Qt.AlignLeft)
        card_layout.addWidget(details)
        self._detail_labels[tier] = details

        card_layout.addStretch()
        start_button = QPushButton(START_BUTTON, card)
        start_button.clicked.connect(lambda _checked=False, t=tier: self.on_start_quiz(t))
        card_layout.addWidget(start_button)
        self._start_buttons[tier] = start_button
        return card

    def refresh(self) -> None:
        catalog = self.quiz_manager.get_catalog()
        self.catalog_label.setText(
            f"{len(catalog)} questions across {catalog.domain_count()} domains"
        )
        pool_sizes = catalog.pool_sizes()
        for tier, label in self._detail_labels.items():
            question_count = min(QUESTION_COUNT, pool_sizes[tier])
            label.setText(
                f"⏱ {self.quiz_manager.get_time_limit(tier)} seconds per question\n"
                f"📝 {question_count} questions"
            )
            self._start_buttons[tier].setEnabled(pool_sizes[tier] > 0)
