"""Tests for the quiz session state machine."""

from __future__ import annotations

import random

import pytest

from conftest import SequenceRandom, make_question
from quiz_arena.core.models import AnswerRecord, Difficulty, SessionPhase, SessionState
from quiz_arena.core.session_machine import (
    AnswerCommand,
    EmptyQuestionPoolError,
    InvalidAnswerError,
    NextCommand,
    QuizRules,
    ResetCommand,
    StartCommand,
    TickCommand,
    TimeoutCommand,
    answer_question,
    initial_state,
    next_question,
    reset_session,
    start_session,
    tick,
    timeout_question,
    transition,
)


def _start(questions, difficulty="easy", **kwargs) -> SessionState:
    return start_session(difficulty, questions, SequenceRandom(), **kwargs)


def _streak_catalog(count: int) -> list:
    return [make_question(f"s{i}", correct_answer=0) for i in range(count)]


# ============================================================================
# START
# ============================================================================


class TestStart:
    def test_initial_state_is_idle(self, check_invariants):
        state = initial_state()

        assert state.phase is SessionPhase.IDLE
        assert state.difficulty is None
        assert state.questions == ()
        check_invariants(state)

    def test_start_filters_by_difficulty_and_truncates(self, sample_questions, check_invariants):
        state = _start(sample_questions)

        assert state.phase is SessionPhase.IN_PROGRESS
        assert state.difficulty is Difficulty.EASY
        assert len(state.questions) == 10
        assert all(q.difficulty is Difficulty.EASY for q in state.questions)
        assert [q.id for q in state.questions] == [f"e{i}" for i in range(10)]
        check_invariants(state)

    def test_start_uses_fewer_questions_when_pool_is_small(self, sample_questions):
        state = _start(sample_questions, "medium")

        assert [q.id for q in state.questions] == ["m0", "m1", "m2"]

    @pytest.mark.parametrize(
        ("difficulty", "seconds"),
        [("easy", 30), ("medium", 45), ("hard", 60)],
    )
    def test_start_sets_time_budget_per_difficulty(self, difficulty, seconds):
        questions = [make_question("x", difficulty=difficulty)]

        state = _start(questions, difficulty)

        assert state.time_left == seconds
        assert state.time_limit_seconds == seconds

    def test_start_resets_progress_fields(self, sample_questions, correct_index):
        state = _start(sample_questions)
        state = answer_question(state, correct_index(state))

        restarted = transition(state, StartCommand("medium", sample_questions, SequenceRandom()))

        assert restarted.score == 0
        assert restarted.streak == 0
        assert restarted.best_streak == 0
        assert restarted.answers == ()
        assert restarted.current_index == 0
        assert restarted.answered is False

    def test_start_with_empty_pool_raises(self, sample_questions):
        with pytest.raises(EmptyQuestionPoolError):
            _start(sample_questions, "hard")

    def test_start_with_unknown_difficulty_raises(self, sample_questions):
        with pytest.raises(ValueError):
            _start(sample_questions, "impossible")

    def test_start_applies_custom_rules(self, sample_questions):
        rules = QuizRules(question_count=4, time_limits={tier: 5 for tier in Difficulty})

        state = _start(sample_questions, rules=rules)

        assert len(state.questions) == 4
        assert state.time_left == 5

    def test_start_order_follows_random_source(self, sample_questions):
        state = start_session("medium", sample_questions, SequenceRandom([0.0]))

        # i=2 swaps with 0, then i=1 swaps with 0
        assert [q.id for q in state.questions] == ["m1", "m2", "m0"]

    def test_start_without_random_source_still_draws_from_pool(self, sample_questions):
        state = start_session("easy", sample_questions)

        assert len(state.questions) == 10
        assert len({q.id for q in state.questions}) == 10


# ============================================================================
# ANSWER / TIMEOUT
# ============================================================================


class TestAnswer:
    def test_correct_answer_scores_and_resolves(self, sample_questions, correct_index, check_invariants):
        state = _start(sample_questions)

        state = answer_question(state, correct_index(state))

        assert state.phase is SessionPhase.RESOLVED
        assert state.score == 10
        assert state.streak == 1
        assert state.answers == (AnswerRecord("e0", 0, True, False),)
        check_invariants(state)

    def test_wrong_answer_scores_nothing(self, sample_questions, wrong_index):
        state = _start(sample_questions)

        state = answer_question(state, wrong_index(state))

        assert state.score == 0
        assert state.streak == 0
        assert state.answers[0].correct is False
        assert state.answers[0].skipped is False

    def test_three_correct_answers_earn_streak_bonus(self):
        state = _start(_streak_catalog(3))
        for _ in range(2):
            state = next_question(answer_question(state, 0))
        state = answer_question(state, 0)

        assert state.streak == 3
        assert state.best_streak == 3
        assert state.score == 10 + 10 + (10 + 1)

    def test_streak_bonus_grows_every_three(self):
        state = _start(_streak_catalog(6))
        for _ in range(5):
            state = next_question(answer_question(state, 0))
        state = answer_question(state, 0)

        # bonuses: 0, 0, 1, 1, 1, 2
        assert state.streak == 6
        assert state.score == 60 + 5

    def test_wrong_answer_resets_streak_but_not_best(self):
        state = _start(_streak_catalog(4))
        for index in (0, 0, 1):
            state = next_question(answer_question(state, index))
        state = answer_question(state, 0)

        assert state.streak == 1
        assert state.best_streak == 2

    def test_second_answer_is_ignored(self, sample_questions):
        state = answer_question(_start(sample_questions), 0)

        again = answer_question(state, 1)

        assert again is state
        assert again == state

    def test_answer_freezes_timer(self, sample_questions):
        state = tick(tick(_start(sample_questions)))

        state = answer_question(state, 0)
        after_tick = tick(state)

        assert state.time_left == 28
        assert after_tick is state

    @pytest.mark.parametrize("index", [-1, 4, 99])
    def test_out_of_range_index_is_rejected(self, sample_questions, index):
        state = _start(sample_questions)

        with pytest.raises(InvalidAnswerError):
            answer_question(state, index)

    @pytest.mark.parametrize("index", [True, 1.0, "1", None])
    def test_non_integer_index_is_rejected(self, sample_questions, index):
        state = _start(sample_questions)

        with pytest.raises(InvalidAnswerError):
            answer_question(state, index)

    def test_invalid_answer_error_is_a_value_error(self):
        assert issubclass(InvalidAnswerError, ValueError)

    def test_answer_outside_a_session_is_ignored(self):
        state = initial_state()

        assert answer_question(state, 0) is state


class TestTimeout:
    def test_timeout_records_skipped_answer(self, sample_questions, check_invariants):
        state = tick(_start(sample_questions))

        state = timeout_question(state)

        assert state.phase is SessionPhase.RESOLVED
        assert state.time_left == 0
        assert state.answers == (AnswerRecord("e0", None, False, True),)
        check_invariants(state)

    def test_timeout_zeroes_streak_but_keeps_best(self):
        state = _start(_streak_catalog(5))
        for _ in range(4):
            state = next_question(answer_question(state, 0))
        assert (state.streak, state.best_streak) == (4, 4)

        state = timeout_question(state)

        assert state.streak == 0
        assert state.best_streak == 4

    def test_timeout_after_answer_is_ignored(self, sample_questions):
        state = answer_question(_start(sample_questions), 0)

        assert timeout_question(state) is state

    def test_answer_after_timeout_is_ignored(self, sample_questions):
        state = timeout_question(_start(sample_questions))

        assert answer_question(state, 0) is state
        assert answer_question(state, 42) is state

    def test_second_timeout_is_ignored(self, sample_questions):
        state = timeout_question(_start(sample_questions))

        assert timeout_question(state) is state

    def test_timeout_while_idle_is_ignored(self):
        state = initial_state()

        assert timeout_question(state) is state

    def test_skipped_answer_record_cannot_be_correct(self):
        with pytest.raises(ValueError):
            AnswerRecord(question_id="x", selected=None, correct=True, skipped=True)
        with pytest.raises(ValueError):
            AnswerRecord(question_id="x", selected=2, correct=False, skipped=True)


# ============================================================================
# NEXT / TICK / RESET
# ============================================================================


class TestNext:
    def test_next_advances_and_resets_timer(self, sample_questions):
        state = answer_question(tick(_start(sample_questions)), 0)

        state = next_question(state)

        assert state.phase is SessionPhase.IN_PROGRESS
        assert state.current_index == 1
        assert state.time_left == 30
        assert state.answered is False

    def test_next_before_answer_is_ignored(self, sample_questions):
        state = _start(sample_questions)

        assert next_question(state) is state

    def test_completion_after_last_question(self, check_invariants):
        state = _start(_streak_catalog(3))
        for _ in range(3):
            state = next_question(answer_question(state, 0))
            check_invariants(state)

        assert state.phase is SessionPhase.FINISHED
        assert state.active is False
        assert state.finished is True
        assert len(state.answers) == 3
        assert state.current_index == 3
        assert state.current_question is None
        assert state.progress_percent == 100

    def test_finished_session_ignores_everything_but_reset(self):
        state = _start(_streak_catalog(1))
        state = next_question(answer_question(state, 0))

        for command in (AnswerCommand(0), TimeoutCommand(), NextCommand(), TickCommand()):
            assert transition(state, command) is state
        assert transition(state, ResetCommand()) == initial_state()


class TestTick:
    def test_tick_decrements(self, sample_questions):
        state = tick(_start(sample_questions))

        assert state.time_left == 29

    def test_tick_never_goes_below_zero(self, sample_questions):
        rules = QuizRules(time_limits={tier: 2 for tier in Difficulty})
        state = _start(sample_questions, rules=rules)

        for _ in range(5):
            state = tick(state)

        assert state.time_left == 0
        assert state.phase is SessionPhase.IN_PROGRESS

    def test_tick_does_not_time_out_by_itself(self, sample_questions):
        rules = QuizRules(time_limits={tier: 1 for tier in Difficulty})
        state = tick(_start(sample_questions, rules=rules))

        assert state.answered is False
        assert state.answers == ()

    def test_tick_while_idle_is_ignored(self):
        state = initial_state()

        assert tick(state) is state


class TestReset:
    def test_reset_from_every_phase(self, sample_questions):
        in_progress = _start(sample_questions)
        resolved = answer_question(in_progress, 0)
        finished = next_question(answer_question(_start(_streak_catalog(1)), 0))

        for state in (initial_state(), in_progress, resolved, finished):
            assert reset_session(state) == SessionState()

    def test_progress_percent(self, sample_questions):
        state = next_question(answer_question(_start(sample_questions), 0))

        assert state.progress_percent == pytest.approx(10.0)
        assert initial_state().progress_percent == 0.0


# ============================================================================
# Dispatch and race properties
# ============================================================================


class TestTransition:
    def test_transition_dispatches_each_command(self, sample_questions):
        state = transition(initial_state(), StartCommand("easy", sample_questions, SequenceRandom()))
        state = transition(state, TickCommand())
        state = transition(state, AnswerCommand(0))
        state = transition(state, NextCommand())
        state = transition(state, TimeoutCommand())

        assert state.current_index == 1
        assert [a.skipped for a in state.answers] == [False, True]

    def test_transition_passes_rules_to_start(self, sample_questions):
        rules = QuizRules(question_count=2)

        state = transition(initial_state(), StartCommand("easy", sample_questions, SequenceRandom()), rules)

        assert len(state.questions) == 2

    def test_unknown_command_raises(self):
        with pytest.raises(TypeError):
            transition(initial_state(), object())

    def test_only_first_of_answer_and_timeout_wins(self, sample_questions):
        start = _start(sample_questions)

        answered_first = timeout_question(answer_question(start, 0))
        timed_out_first = answer_question(timeout_question(start), 0)

        assert answered_first.answers[0].skipped is False
        assert timed_out_first.answers[0].skipped is True
        assert len(answered_first.answers) == len(timed_out_first.answers) == 1

    @pytest.mark.parametrize("seed", range(20))
    def test_random_command_sequences_keep_invariants(self, sample_questions, check_invariants, seed):
        rng = random.Random(seed)
        state = initial_state()
        for _ in range(200):
            roll = rng.random()
            if roll < 0.05:
                command = StartCommand(rng.choice(["easy", "medium"]), sample_questions, rng)
            elif roll < 0.35:
                command = AnswerCommand(rng.randrange(4))
            elif roll < 0.45:
                command = TimeoutCommand()
            elif roll < 0.7:
                command = NextCommand()
            elif roll < 0.98:
                command = TickCommand()
            else:
                command = ResetCommand()
            previous = state
            state = transition(state, command)
            check_invariants(state)
            if previous.difficulty is not None and state.difficulty == previous.difficulty:
                if not isinstance(command, (StartCommand, ResetCommand)):
                    assert state.score >= previous.score
                    assert state.best_streak >= previous.best_streak
