"""Shared fixtures for the quiz engine tests."""

from __future__ import annotations

from itertools import cycle
from typing import Callable, Iterable

import pytest

from quiz_arena.core.models import Difficulty, QuestionRecord, SessionState
from quiz_arena.core.quiz_manager import QuizManager
from quiz_arena.core.services.question_catalog import QuestionCatalog
from quiz_arena.core.services.result_history import ResultHistory


class SequenceRandom:
    """Random source replaying a fixed list of floats, cycling when exhausted."""

    def __init__(self, values: Iterable[float] = (0.999999,)) -> None:
        self._values = cycle(list(values))

    def random(self) -> float:
        return next(self._values)


def make_question(
    question_id: str,
    correct_answer: int = 0,
    difficulty: Difficulty | str = Difficulty.EASY,
    domain: str = "Networking",
) -> QuestionRecord:
    return QuestionRecord(
        id=question_id,
        question=f"Question {question_id}?",
        options=("first", "second", "third", "fourth"),
        correct_answer=correct_answer,
        explanation=f"Because of {question_id}.",
        difficulty=Difficulty(difficulty),
        domain=domain,
    )


@pytest.fixture
def identity_random() -> SequenceRandom:
    """Random source under which Fisher-Yates keeps the input order."""
    return SequenceRandom()


@pytest.fixture
def sample_questions() -> list[QuestionRecord]:
    """Twelve easy questions, three medium ones and no hard ones."""
    easy = [
        make_question(f"e{i}", correct_answer=i % 4, domain="Linux" if i % 2 else "Networking")
        for i in range(12)
    ]
    medium = [make_question(f"m{i}", correct_answer=1, difficulty="medium", domain="Web") for i in range(3)]
    return easy + medium


@pytest.fixture
def sample_catalog(sample_questions) -> QuestionCatalog:
    return QuestionCatalog(sample_questions)


@pytest.fixture
def history() -> ResultHistory:
    return ResultHistory()


@pytest.fixture
def quiz_manager(sample_catalog, history, identity_random) -> QuizManager:
    return QuizManager(catalog=sample_catalog, history=history, random_source=identity_random)


@pytest.fixture
def correct_index() -> Callable[[SessionState], int]:
    def _correct_index(state: SessionState) -> int:
        return state.questions[state.current_index].correct_answer

    return _correct_index


@pytest.fixture
def wrong_index() -> Callable[[SessionState], int]:
    def _wrong_index(state: SessionState) -> int:
        return (state.questions[state.current_index].correct_answer + 1) % 4

    return _wrong_index


@pytest.fixture
def check_invariants() -> Callable[[SessionState], None]:
    def _check(state: SessionState) -> None:
        assert len(state.answers) <= len(state.questions)
        assert 0 <= state.current_index <= len(state.questions)
        assert not (state.active and state.finished)
        assert state.best_streak >= state.streak
        assert state.time_left >= 0
        assert state.score >= 0
        if state.active:
            expected = state.current_index + (1 if state.answered else 0)
            assert len(state.answers) == expected
        if state.finished:
            assert len(state.answers) == len(state.questions)
            assert state.current_index == len(state.questions)
        answered_ids = [answer.question_id for answer in state.answers]
        assert answered_ids == [q.id for q in state.questions[: len(state.answers)]]
        for answer in state.answers:
            if answer.skipped:
                assert answer.correct is False and answer.selected is None

    return _check
