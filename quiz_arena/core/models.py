"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Difficulty(str, Enum):
    """Difficulty tier a question belongs to."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SessionPhase(Enum):
    """Classification of a session derived from its flags."""

    IDLE = auto()
    IN_PROGRESS = auto()
    RESOLVED = auto()
    FINISHED = auto()


@dataclass(frozen=True, slots=True)
class QuestionRecord:
    """Read-only multiple-choice question taken from the catalog."""

    id: str
    question: str
    options: tuple[str, ...]
    correct_answer: int
    explanation: str
    difficulty: Difficulty
    domain: str


@dataclass(frozen=True, slots=True)
class AnswerRecord:
    """Outcome of one question. ``selected`` is None when the question timed out."""

    question_id: str
    selected: int | None
    correct: bool
    skipped: bool = False

    def __post_init__(self) -> None:
        if self.skipped and (self.correct or self.selected is not None):
            raise ValueError("A skipped answer cannot carry a selection or be correct.")


@dataclass(frozen=True, slots=True)
class SessionState:
    """Snapshot of a quiz session. Every transition produces a new instance."""

    difficulty: Difficulty | None = None
    questions: tuple[QuestionRecord, ...] = ()
    current_index: int = 0
    score: int = 0
    streak: int = 0
    best_streak: int = 0
    answers: tuple[AnswerRecord, ...] = ()
    time_left: int = 0
    time_limit_seconds: int = 0
    answered: bool = False
    active: bool = False
    finished: bool = False

    @property
    def phase(self) -> SessionPhase:
        if self.finished:
            return SessionPhase.FINISHED
        if not self.active:
            return SessionPhase.IDLE
        if self.answered:
            return SessionPhase.RESOLVED
        return SessionPhase.IN_PROGRESS

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> QuestionRecord | None:
        if not self.active or self.current_index >= len(self.questions):
            return None
        return self.questions[self.current_index]

    @property
    def last_answer(self) -> AnswerRecord | None:
        return self.answers[-1] if self.answers else None

    @property
    def progress_percent(self) -> float:
        """Share of the quiz already completed, from 0 to 100."""
        if not self.questions:
            return 0.0
        return 100 * self.current_index / len(self.questions)

    @property
    def correct_count(self) -> int:
        return sum(1 for answer in self.answers if answer.correct)

    @property
    def wrong_count(self) -> int:
        return sum(1 for answer in self.answers if not answer.correct and not answer.skipped)

    @property
    def skipped_count(self) -> int:
        return sum(1 for answer in self.answers if answer.skipped)
