"""Scoring, grading and end-of-quiz summaries."""

from __future__ import annotations

from dataclasses import dataclass
import math

from quiz_arena.constants.quiz_constants import (
    FAILING_GRADE,
    GRADE_THRESHOLDS,
    POINTS_PER_CORRECT,
    STREAK_BONUS_STEP,
)
from quiz_arena.core.models import AnswerRecord, Difficulty, SessionPhase, SessionState


class SessionNotFinishedError(RuntimeError):
    """Raised when a summary is requested before the quiz is complete."""


def streak_bonus(streak: int) -> int:
    """Extra points earned for a streak: one per full run of three."""
    return streak // STREAK_BONUS_STEP


def points_for_answer(is_correct: bool, new_streak: int) -> int:
    if not is_correct:
        return 0
    return POINTS_PER_CORRECT + streak_bonus(new_streak)


def percentage(correct: int, total: int) -> int:
    """Whole-number percentage, rounding halves up."""
    if total <= 0:
        return 0
    return math.floor(100 * correct / total + 0.5)


def grade_for_percentage(pct: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if pct >= threshold:
            return grade
    return FAILING_GRADE


@dataclass(frozen=True, slots=True)
class QuizSummary:
    """Final result of a finished session, as handed to the history sink."""

    difficulty: Difficulty
    score: int
    total: int
    percentage: int
    grade: str
    best_streak: int
    answers: tuple[AnswerRecord, ...]
    points: int
    wrong_count: int
    skipped_count: int

    def to_payload(self) -> dict[str, object]:
        return {
            "difficulty": self.difficulty.value,
            "score": self.score,
            "total": self.total,
            "percentage": self.percentage,
            "grade": self.grade,
            "best_streak": self.best_streak,
            "points": self.points,
            "wrong_count": self.wrong_count,
            "skipped_count": self.skipped_count,
            "answers": [
                {
                    "question_id": answer.question_id,
                    "correct": answer.correct,
                    "skipped": answer.skipped,
                }
                for answer in self.answers
            ],
        }


def summarize(state: SessionState) -> QuizSummary:
    """Build the read-only summary of a finished session."""
    if state.phase is not SessionPhase.FINISHED or state.difficulty is None:
        raise SessionNotFinishedError("The quiz has not been completed yet.")

    correct = state.correct_count
    pct = percentage(correct, state.total)
    return QuizSummary(
        difficulty=state.difficulty,
        score=correct,
        total=state.total,
        percentage=pct,
        grade=grade_for_percentage(pct),
        best_streak=state.best_streak,
        answers=state.answers,
        points=state.score,
        wrong_count=state.wrong_count,
        skipped_count=state.skipped_count,
    )
