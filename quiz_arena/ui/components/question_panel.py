"""Component for answering questions against the countdown."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from quiz_arena.constants.quiz_constants import TIME_WARNING_SECONDS
from quiz_arena.constants.ui_constants import (
    DIFFICULTY_LABELS,
    EXPLANATION_HIDE,
    EXPLANATION_SHOW,
    FINISH_BUTTON,
    NEXT_BUTTON,
    OPTION_LETTERS,
    TICK_INTERVAL_MS,
)
from quiz_arena.core.models import SessionPhase, SessionState
from quiz_arena.core.quiz_manager import QuizManager
from quiz_arena.core.services.countdown import CountdownDriver
from quiz_arena.core.session_machine import InvalidAnswerError
from quiz_arena.styling.color_palette import ColorPalette, Theme
from quiz_arena.ui.dialog_helpers import show_error
from quiz_arena.ui.question_renderer import option_label, render_explanation, render_question


class QuestionPanel(QWidget):
    """UI component for the in-progress quiz."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_quiz_finished: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_quiz_finished = on_quiz_finished
        self.countdown = CountdownDriver(quiz_manager)

        self._game_font_size: int = 14
        # Presentation-only toggle, reset for every question
        self._showing_explanation: bool = False

        self._build_ui()
        self._configure_countdown_timer()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        meta_row = QHBoxLayout()
        self.domain_label = QLabel("", self)
        meta_row.addWidget(self.domain_label)
        self.difficulty_label = QLabel("", self)
        meta_row.addWidget(self.difficulty_label)
        meta_row.addStretch()
        self.position_label = QLabel("", self)
        meta_row.addWidget(self.position_label)
        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        meta_row.addWidget(self.progress_bar, stretch=1)
        self.timer_label = QLabel("", self)
        meta_row.addWidget(self.timer_label)
        layout.addLayout(meta_row)

        score_row = QHBoxLayout()
        self.score_label = QLabel("Score: 0", self)
        score_row.addWidget(self.score_label)
        self.streak_label = QLabel("Streak: 0", self)
        score_row.addWidget(self.streak_label)
        score_row.addStretch()
        layout.addLayout(score_row)

        self.question_view = QTextBrowser(self)
        layout.addWidget(self.question_view, stretch=1)

        self.option_buttons: list[QPushButton] = []
        options_grid = QVBoxLayout()
        for index in range(len(OPTION_LETTERS)):
            button = QPushButton("", self)
            button.clicked.connect(lambda _checked=False, i=index: self._handle_answer(i))
            options_grid.addWidget(button)
            self.option_buttons.append(button)
        layout.addLayout(options_grid)

        action_row = QHBoxLayout()
        action_row.addStretch()
        self.explanation_button = QPushButton(EXPLANATION_SHOW, self)
        self.explanation_button.clicked.connect(self._toggle_explanation)
        action_row.addWidget(self.explanation_button)
        self.next_button = QPushButton(NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        action_row.addWidget(self.next_button)
        layout.addLayout(action_row)

        self.explanation_view = QTextBrowser(self)
        self.explanation_view.setVisible(False)
        layout.addWidget(self.explanation_view, stretch=1)

    def _configure_countdown_timer(self) -> None:
        self.countdown_timer = QTimer(self)
        self.countdown_timer.setInterval(TICK_INTERVAL_MS)
        self.countdown_timer.timeout.connect(self._handle_second_elapsed)

    def begin(self) -> None:
        """Show the current question and start the countdown."""
        self._showing_explanation = False
        self._render_state(self.quiz_manager.get_state())
        self._restart_countdown()

    def stop(self) -> None:
        self.countdown_timer.stop()

    def set_game_font_size(self, size: int) -> None:
        self._game_font_size = size
        style = f"font-size: {size}pt;"
        for button in self.option_buttons:
            button.setStyleSheet(style)
        if self.quiz_manager.get_state().phase in (SessionPhase.IN_PROGRESS, SessionPhase.RESOLVED):
            self._render_state(self.quiz_manager.get_state())

    def _restart_countdown(self) -> None:
        if self.countdown.should_run():
            self.countdown_timer.start()
        else:
            self.countdown_timer.stop()

    def _handle_second_elapsed(self) -> None:
        keep_running = self.countdown.on_second()
        if not keep_running:
            self.countdown_timer.stop()
        self._render_state(self.quiz_manager.get_state())

    def _handle_answer(self, index: int) -> None:
        try:
            state = self.quiz_manager.answer(index)
        except InvalidAnswerError as exc:
            show_error(self, "Invalid answer", str(exc))
            return
        self.countdown_timer.stop()
        self._render_state(state)

    def _handle_next(self) -> None:
        state = self.quiz_manager.next_question()
        if state.phase is SessionPhase.FINISHED:
            self.countdown_timer.stop()
            self.on_quiz_finished()
            return
        self._showing_explanation = False
        self._render_state(state)
        self._restart_countdown()

    def _toggle_explanation(self) -> None:
        self._showing_explanation = not self._showing_explanation
        self._render_state(self.quiz_manager.get_state())

    def _render_state(self, state: SessionState) -> None:
        question = state.current_question
        if question is None:
            return

        answered = state.phase is SessionPhase.RESOLVED
        self.domain_label.setText(question.domain)
        self.difficulty_label.setText(DIFFICULTY_LABELS[state.difficulty.value])
        self.position_label.setText(f"{state.current_index + 1} / {state.total}")
        self.progress_bar.setValue(int(state.progress_percent))
        self.score_label.setText(f"Score: {state.score}")
        self.streak_label.setText(f"Streak: {state.streak}")
        self._render_timer(state.time_left)

        self.question_view.setHtml(render_question(question, self._game_font_size))
        answer = state.answers[state.current_index] if answered else None
        for index, button in enumerate(self.option_buttons):
            button.setText(option_label(index, question.options[index]))
            button.setEnabled(not answered)
            button.setStyleSheet(self._option_style(index, question.correct_answer, answer))

        self.explanation_button.setVisible(answered)
        self.explanation_button.setText(
            EXPLANATION_HIDE if self._showing_explanation else EXPLANATION_SHOW
        )
        self.next_button.setVisible(answered)
        self.next_button.setText(
            FINISH_BUTTON if state.current_index + 1 >= state.total else NEXT_BUTTON
        )
        show_explanation = answered and self._showing_explanation
        self.explanation_view.setVisible(show_explanation)
        if show_explanation:
            self.explanation_view.setHtml(render_explanation(question, self._game_font_size))

    def _render_timer(self, time_left: int) -> None:
        style = f"padding: 2px 6px; border-radius: 4px; font-size: {self._game_font_size}pt;"
        if time_left <= TIME_WARNING_SECONDS:
            style += f" color: #fff; background-color: {ColorPalette.ERROR.get(Theme.LIGHT)};"
        self.timer_label.setStyleSheet(style)
        self.timer_label.setText(f"⏱ {time_left}s")

    def _option_style(self, index: int, correct_index: int, answer) -> str:
        style = f"font-size: {self._game_font_size}pt; text-align: left;"
        if answer is None:
            return style
        if index == correct_index:
            return style + f" background-color: {ColorPalette.SUCCESS.get(Theme.LIGHT)}; color: #fff;"
        if index == answer.selected and not answer.correct:
            return style + f" background-color: {ColorPalette.ERROR.get(Theme.LIGHT)}; color: #fff;"
        return style
