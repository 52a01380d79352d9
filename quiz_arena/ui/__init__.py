"""Qt UI components for the desktop client."""

from .dialog_helpers import (
    confirm_abandon_quiz,
    show_error,
    show_info,
    show_warning,
)
from .question_renderer import option_label, render_explanation, render_question
from .quiz_main_window import QuizMainWindow

__all__ = [
    "QuizMainWindow",
    "confirm_abandon_quiz",
    "option_label",
    "render_explanation",
    "render_question",
    "show_error",
    "show_info",
    "show_warning",
]
