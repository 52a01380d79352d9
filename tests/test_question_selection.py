"""Tests for the Fisher-Yates shuffle and question selection."""

from __future__ import annotations

from collections import Counter
import random

import pytest

from conftest import SequenceRandom
from quiz_arena.core.models import Difficulty
from quiz_arena.core.question_selection import fisher_yates_shuffle, select_questions


def test_shuffle_follows_random_draws():
    shuffled = fisher_yates_shuffle(["a", "b", "c", "d"], SequenceRandom([0.0, 0.5, 0.9]))

    assert shuffled == ["d", "c", "b", "a"]


def test_shuffle_keeps_order_when_draws_are_near_one():
    assert fisher_yates_shuffle([1, 2, 3, 4, 5], SequenceRandom()) == [1, 2, 3, 4, 5]


def test_shuffle_tolerates_a_source_returning_one():
    assert fisher_yates_shuffle([1, 2, 3], SequenceRandom([1.0])) == [1, 2, 3]


def test_shuffle_does_not_mutate_input():
    items = [1, 2, 3, 4]

    result = fisher_yates_shuffle(items, random.Random(7))

    assert items == [1, 2, 3, 4]
    assert sorted(result) == items


@pytest.mark.parametrize("items", [[], ["only"]])
def test_shuffle_of_short_sequences(items):
    assert fisher_yates_shuffle(items, random.Random(0)) == items


def test_shuffle_is_unbiased():
    rng = random.Random(1234)

    counts = Counter(tuple(fisher_yates_shuffle("abc", rng)) for _ in range(60000))

    assert len(counts) == 6
    for permutation, count in counts.items():
        assert 9500 <= count <= 10500, permutation


def test_select_filters_by_difficulty(sample_questions):
    selected = select_questions(sample_questions, Difficulty.MEDIUM, 10, random.Random(3))

    assert sorted(q.id for q in selected) == ["m0", "m1", "m2"]


def test_select_truncates_to_count(sample_questions):
    selected = select_questions(sample_questions, Difficulty.EASY, 5, SequenceRandom())

    assert [q.id for q in selected] == ["e0", "e1", "e2", "e3", "e4"]


def test_select_draws_distinct_questions(sample_questions):
    selected = select_questions(sample_questions, Difficulty.EASY, 10, random.Random(99))

    assert len(selected) == 10
    assert len({q.id for q in selected}) == 10


def test_select_from_empty_pool(sample_questions):
    assert select_questions(sample_questions, Difficulty.HARD, 10, random.Random()) == ()


def test_select_rejects_negative_count(sample_questions):
    with pytest.raises(ValueError):
        select_questions(sample_questions, Difficulty.EASY, -1, random.Random())
