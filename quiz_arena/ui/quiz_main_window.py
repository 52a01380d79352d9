"""Qt main window switching between difficulty, quiz, results and history views."""

from __future__ import annotations

from enum import Enum, auto

from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quiz_arena.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from quiz_arena.constants.ui_constants import (
    EMPTY_POOL_MESSAGE,
    NAV_BUTTON_ABOUT,
    NAV_BUTTON_HELP,
    NAV_BUTTON_HISTORY,
    NAV_BUTTON_PLAY,
    NAV_BUTTON_SETTINGS,
    WINDOW_TITLE,
)
from quiz_arena.core.models import Difficulty, SessionPhase
from quiz_arena.core.quiz_manager import QuizManager
from quiz_arena.core.services.result_history import ResultHistory
from quiz_arena.core.session_machine import EmptyQuestionPoolError
from quiz_arena.styling.styles import Styles
from quiz_arena.ui.components.difficulty_panel import DifficultyPanel
from quiz_arena.ui.components.history_panel import HistoryPanel
from quiz_arena.ui.components.question_panel import QuestionPanel
from quiz_arena.ui.components.results_panel import ResultsPanel
from quiz_arena.ui.dialog_helpers import confirm_abandon_quiz, show_info, show_warning
from quiz_arena.ui.settings_dialog import SettingsDialog


class ScreenMode(Enum):
    """Which view the main window is showing."""

    DIFFICULTY = auto()
    QUIZ = auto()
    RESULTS = auto()
    HISTORY = auto()


class QuizMainWindow(QMainWindow):
    """Main Qt window orchestrating one player's quiz sessions."""

    def __init__(self, quiz_manager: QuizManager, history: ResultHistory) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.quiz_manager = quiz_manager
        self.history = history

        self._mode = ScreenMode.DIFFICULTY
        self._game_font_size: int = 14
        self._shuffle_seed: int | None = None
        self._last_difficulty: Difficulty | None = None

        self._build_ui()
        self._apply_styles()
        self._set_mode(ScreenMode.DIFFICULTY)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_nav_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.difficulty_panel = DifficultyPanel(
            self.quiz_manager,
            on_start_quiz=self._start_quiz,
            parent=self,
        )
        self.question_panel = QuestionPanel(
            self.quiz_manager,
            on_quiz_finished=self._show_results,
            parent=self,
        )
        self.results_panel = ResultsPanel(
            on_try_again=self._handle_try_again,
            on_home=self._go_home,
            parent=self,
        )
        self.history_panel = HistoryPanel(self.history, parent=self)

        self.mode_stack.addWidget(self.difficulty_panel)
        self.mode_stack.addWidget(self.question_panel)
        self.mode_stack.addWidget(self.results_panel)
        self.mode_stack.addWidget(self.history_panel)
        root_layout.addWidget(self.mode_stack)

    def _build_nav_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.play_button = QPushButton(NAV_BUTTON_PLAY, self)
        self.play_button.setCheckable(True)
        self.play_button.clicked.connect(self._go_home)
        button_row.addWidget(self.play_button)

        self.history_button = QPushButton(NAV_BUTTON_HISTORY, self)
        self.history_button.setCheckable(True)
        self.history_button.clicked.connect(self._show_history)
        button_row.addWidget(self.history_button)

        button_row.addStretch()

        self.settings_button = QPushButton(NAV_BUTTON_SETTINGS, self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        self.about_button = QPushButton(NAV_BUTTON_ABOUT, self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton(NAV_BUTTON_HELP, self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        layout.addLayout(button_row)

    def _set_mode(self, mode: ScreenMode) -> None:
        self._mode = mode
        self.play_button.setChecked(mode is not ScreenMode.HISTORY)
        self.history_button.setChecked(mode is ScreenMode.HISTORY)

        index_map = {
            ScreenMode.DIFFICULTY: 0,
            ScreenMode.QUIZ: 1,
            ScreenMode.RESULTS: 2,
            ScreenMode.HISTORY: 3,
        }
        if mode is ScreenMode.DIFFICULTY:
            self.difficulty_panel.refresh()
        elif mode is ScreenMode.HISTORY:
            self.history_panel.refresh()
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _leave_quiz(self) -> bool:
        """Discard a running session after confirmation. False if the player declined."""
        phase = self.quiz_manager.get_state().phase
        if phase in (SessionPhase.IN_PROGRESS, SessionPhase.RESOLVED):
            if not confirm_abandon_quiz(self):
                self._set_mode(self._mode)
                return False
        self.question_panel.stop()
        self.quiz_manager.reset()
        return True

    def _start_quiz(self, difficulty: Difficulty) -> None:
        try:
            self.quiz_manager.start_quiz(difficulty)
        except EmptyQuestionPoolError:
            show_warning(self, "No questions", EMPTY_POOL_MESSAGE)
            return
        self._last_difficulty = difficulty
        self._set_mode(ScreenMode.QUIZ)
        self.question_panel.begin()

    def _show_results(self) -> None:
        summary = self.quiz_manager.get_summary()
        self.results_panel.show_results(summary, self.quiz_manager.get_state())
        self._set_mode(ScreenMode.RESULTS)

    def _handle_try_again(self) -> None:
        self.quiz_manager.reset()
        if self._last_difficulty is None:
            self._set_mode(ScreenMode.DIFFICULTY)
            return
        self._start_quiz(self._last_difficulty)

    def _go_home(self) -> None:
        if self._mode is ScreenMode.DIFFICULTY:
            self._set_mode(ScreenMode.DIFFICULTY)
            return
        if self._leave_quiz():
            self._set_mode(ScreenMode.DIFFICULTY)

    def _show_history(self) -> None:
        if self._leave_quiz():
            self._set_mode(ScreenMode.HISTORY)

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details, font_point_size=self._game_font_size)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT, font_point_size=self._game_font_size)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(self, self._game_font_size, self._shuffle_seed)
        if dialog.exec():
            self._game_font_size = dialog.get_game_font_size()
            self._shuffle_seed = dialog.get_shuffle_seed()
            self.quiz_manager.set_shuffle_seed(self._shuffle_seed)
            self._apply_styles()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())
        self.question_panel.set_game_font_size(self._game_font_size)

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        self.question_panel.stop()
        super().closeEvent(event)
