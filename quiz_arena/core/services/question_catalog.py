"""Service holding the read-only question bank."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Iterator

from quiz_arena.core.models import Difficulty, QuestionRecord

_OPTION_COUNT = 4


class QuestionCatalog:
    """Immutable collection of questions, partitioned by difficulty tag."""

    def __init__(self, questions: Iterable[QuestionRecord] = ()) -> None:
        self._questions: tuple[QuestionRecord, ...] = ()
        self._load(questions)

    def _load(self, questions: Iterable[QuestionRecord]) -> None:
        prepared: list[QuestionRecord] = []
        seen_ids: set[str] = set()
        for question in questions:
            self._check_question(question)
            if question.id in seen_ids:
                raise ValueError(f"Duplicate question id '{question.id}'.")
            seen_ids.add(question.id)
            prepared.append(question)
        self._questions = tuple(prepared)

    def __iter__(self) -> Iterator[QuestionRecord]:
        return iter(self._questions)

    def __len__(self) -> int:
        return len(self._questions)

    def get_questions(self) -> list[QuestionRecord]:
        """Return a copy of all questions in catalog order."""
        return list(self._questions)

    def get_question(self, question_id: str) -> QuestionRecord:
        for question in self._questions:
            if question.id == question_id:
                return question
        raise KeyError(question_id)

    def pool_for(self, difficulty: Difficulty | str) -> list[QuestionRecord]:
        tier = Difficulty(difficulty)
        return [question for question in self._questions if question.difficulty == tier]

    def pool_sizes(self) -> dict[Difficulty, int]:
        counts = Counter(question.difficulty for question in self._questions)
        return {tier: counts.get(tier, 0) for tier in Difficulty}

    def domains(self) -> list[str]:
        """Distinct domain labels in order of first appearance."""
        return list(dict.fromkeys(question.domain for question in self._questions))

    def domain_count(self) -> int:
        return len(self.domains())

    @staticmethod
    def _check_question(question: QuestionRecord) -> None:
        if len(question.options) != _OPTION_COUNT:
            raise ValueError(f"Question '{question.id}' must have exactly four options.")
        if not 0 <= question.correct_answer < len(question.options):
            raise ValueError(f"Question '{question.id}' has an invalid correct answer index.")
