"""Question rendering utilities for the desktop client."""

from __future__ import annotations

from quiz_arena.constants.ui_constants import OPTION_LETTERS
from quiz_arena.core.markdown_renderer import renderer
from quiz_arena.core.models import QuestionRecord


def render_question(question: QuestionRecord, font_size: int = 14) -> str:
    """Render a question prompt as an HTML document for QTextBrowser."""
    return renderer.render_document(question.question, font_size=font_size)


def render_explanation(question: QuestionRecord, font_size: int = 14) -> str:
    """Render the explanation together with the correct option."""
    letter = OPTION_LETTERS[question.correct_answer]
    markdown = (
        f"**Correct: {letter}.** {question.options[question.correct_answer]}\n\n"
        f"{question.explanation or '_No explanation available._'}"
    )
    return renderer.render_document(markdown, font_size=font_size)


def option_label(index: int, option_text: str) -> str:
    """Plain-text label for an option button."""
    return f"{OPTION_LETTERS[index]}.  {option_text}"
