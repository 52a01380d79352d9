"""Quiz session state machine.

Every command is a pure function ``(state, ...) -> state``. A command that is
not valid for the current phase returns the very same state object, so a late
timer callback or a double click can never corrupt a session. Only ``START``
consumes randomness, and it comes from the injected random source.

Phases, derived from the state flags:

    IDLE --START--> IN_PROGRESS --ANSWER/TIMEOUT--> RESOLVED
    RESOLVED --NEXT--> IN_PROGRESS            (more questions left)
    RESOLVED --NEXT--> FINISHED               (last question)
    any --RESET--> IDLE
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import random
from typing import Iterable, Mapping

from quiz_arena.constants.quiz_constants import QUESTION_COUNT, TIME_LIMITS_SECONDS
from quiz_arena.core.models import (
    AnswerRecord,
    Difficulty,
    QuestionRecord,
    SessionPhase,
    SessionState,
)
from quiz_arena.core.question_selection import RandomSource, select_questions
from quiz_arena.core.scoring import points_for_answer


class QuizSessionError(Exception):
    """Base class for errors reported by the session machine."""


class EmptyQuestionPoolError(QuizSessionError):
    """Raised when the catalog has no questions for the requested difficulty."""


class InvalidAnswerError(QuizSessionError, ValueError):
    """Raised when an answer index does not address an option of the question."""


def _default_time_limits() -> dict[Difficulty, int]:
    return {Difficulty(name): seconds for name, seconds in TIME_LIMITS_SECONDS.items()}


@dataclass(frozen=True, slots=True)
class QuizRules:
    """Tunable parameters applied when a session starts."""

    question_count: int = QUESTION_COUNT
    time_limits: Mapping[Difficulty, int] = field(default_factory=_default_time_limits)

    def time_limit_for(self, difficulty: Difficulty) -> int:
        return self.time_limits[difficulty]


DEFAULT_RULES = QuizRules()


@dataclass(frozen=True, slots=True)
class StartCommand:
    difficulty: Difficulty | str
    catalog: Iterable[QuestionRecord]
    random_source: RandomSource | None = None


@dataclass(frozen=True, slots=True)
class AnswerCommand:
    index: int


@dataclass(frozen=True, slots=True)
class TimeoutCommand:
    pass


@dataclass(frozen=True, slots=True)
class NextCommand:
    pass


@dataclass(frozen=True, slots=True)
class TickCommand:
    pass


@dataclass(frozen=True, slots=True)
class ResetCommand:
    pass


Command = StartCommand | AnswerCommand | TimeoutCommand | NextCommand | TickCommand | ResetCommand


def initial_state() -> SessionState:
    return SessionState()


def start_session(
    difficulty: Difficulty | str,
    catalog: Iterable[QuestionRecord],
    random_source: RandomSource | None = None,
    rules: QuizRules = DEFAULT_RULES,
) -> SessionState:
    """Build a fresh in-progress session for ``difficulty``.

    Raises:
        ValueError: if ``difficulty`` is not a supported tier.
        EmptyQuestionPoolError: if the catalog holds no question for it.
    """
    tier = Difficulty(difficulty)
    source = random_source if random_source is not None else random.Random()
    questions = select_questions(catalog, tier, rules.question_count, source)
    if not questions:
        raise EmptyQuestionPoolError(f"No questions available for difficulty '{tier.value}'.")

    time_limit = rules.time_limit_for(tier)
    return SessionState(
        difficulty=tier,
        questions=questions,
        time_left=time_limit,
        time_limit_seconds=time_limit,
        active=True,
    )


def answer_question(state: SessionState, index: int) -> SessionState:
    if state.phase is not SessionPhase.IN_PROGRESS:
        return state

    question = state.questions[state.current_index]
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidAnswerError(f"Answer index must be an integer, got {index!r}.")
    if not 0 <= index < len(question.options):
        raise InvalidAnswerError(
            f"Answer index {index} is outside options 0-{len(question.options) - 1}."
        )

    is_correct = index == question.correct_answer
    new_streak = state.streak + 1 if is_correct else 0
    answer = AnswerRecord(question_id=question.id, selected=index, correct=is_correct)
    return replace(
        state,
        answered=True,
        streak=new_streak,
        best_streak=max(state.best_streak, new_streak),
        score=state.score + points_for_answer(is_correct, new_streak),
        answers=state.answers + (answer,),
    )


def timeout_question(state: SessionState) -> SessionState:
    if state.phase is not SessionPhase.IN_PROGRESS:
        return state

    question = state.questions[state.current_index]
    answer = AnswerRecord(question_id=question.id, selected=None, correct=False, skipped=True)
    return replace(
        state,
        answered=True,
        streak=0,
        time_left=0,
        answers=state.answers + (answer,),
    )


def next_question(state: SessionState) -> SessionState:
    if state.phase is not SessionPhase.RESOLVED:
        return state

    next_index = state.current_index + 1
    if next_index >= len(state.questions):
        return replace(state, current_index=len(state.questions), active=False, finished=True)
    return replace(
        state,
        current_index=next_index,
        answered=False,
        time_left=state.time_limit_seconds,
    )


def tick(state: SessionState) -> SessionState:
    if state.phase is not SessionPhase.IN_PROGRESS or state.time_left <= 0:
        return state
    return replace(state, time_left=state.time_left - 1)


def reset_session(state: SessionState | None = None) -> SessionState:
    return initial_state()


def transition(
    state: SessionState,
    command: Command,
    rules: QuizRules = DEFAULT_RULES,
) -> SessionState:
    """Apply ``command`` to ``state`` and return the resulting state."""
    if isinstance(command, StartCommand):
        return start_session(command.difficulty, command.catalog, command.random_source, rules)
    if isinstance(command, AnswerCommand):
        return answer_question(state, command.index)
    if isinstance(command, TimeoutCommand):
        return timeout_question(state)
    if isinstance(command, NextCommand):
        return next_question(state)
    if isinstance(command, TickCommand):
        return tick(state)
    if isinstance(command, ResetCommand):
        return reset_session(state)
    raise TypeError(f"Unsupported command: {command!r}")
