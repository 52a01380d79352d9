"""Random question selection for a new quiz session."""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, TypeVar

from quiz_arena.core.models import Difficulty, QuestionRecord

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that yields floats in ``[0, 1)``, such as ``random.Random``."""

    def random(self) -> float: ...


def fisher_yates_shuffle(items: Sequence[T], random_source: RandomSource) -> list[T]:
    """Return an unbiased permutation of ``items`` without mutating the input."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        # min() guards against sources that round up to exactly 1.0
        j = min(int(random_source.random() * (i + 1)), i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def select_questions(
    catalog: Iterable[QuestionRecord],
    difficulty: Difficulty,
    count: int,
    random_source: RandomSource,
) -> tuple[QuestionRecord, ...]:
    """Pick up to ``count`` shuffled questions tagged with ``difficulty``."""
    if count < 0:
        raise ValueError("Question count must not be negative.")
    pool = [question for question in catalog if question.difficulty == difficulty]
    return tuple(fisher_yates_shuffle(pool, random_source)[:count])
