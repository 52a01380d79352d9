"""Tests for the per-second countdown driver."""

from __future__ import annotations

from quiz_arena.core.models import Difficulty, SessionPhase
from quiz_arena.core.quiz_manager import QuizManager
from quiz_arena.core.services.countdown import CountdownDriver
from quiz_arena.core.session_machine import QuizRules


def _short_timer_manager(sample_catalog, identity_random, seconds=3) -> QuizManager:
    rules = QuizRules(time_limits={tier: seconds for tier in Difficulty})
    return QuizManager(catalog=sample_catalog, rules=rules, random_source=identity_random)


def test_driver_idle_without_session(quiz_manager):
    driver = CountdownDriver(quiz_manager)

    assert driver.should_run() is False
    assert driver.on_second() is False
    assert quiz_manager.get_state().phase is SessionPhase.IDLE


def test_each_second_ticks_once(quiz_manager):
    quiz_manager.start_quiz("easy")
    driver = CountdownDriver(quiz_manager)

    assert driver.on_second() is True
    assert driver.on_second() is True
    assert quiz_manager.get_state().time_left == 28


def test_expiry_issues_timeout(sample_catalog, identity_random):
    manager = _short_timer_manager(sample_catalog, identity_random)
    manager.start_quiz("easy")
    driver = CountdownDriver(manager)

    running = [driver.on_second() for _ in range(3)]

    assert running == [True, True, False]
    state = manager.get_state()
    assert state.phase is SessionPhase.RESOLVED
    assert state.answers[-1].skipped is True
    assert state.time_left == 0


def test_driver_stops_after_answer(quiz_manager):
    quiz_manager.start_quiz("easy")
    quiz_manager.answer(0)
    driver = CountdownDriver(quiz_manager)

    assert driver.on_second() is False
    assert quiz_manager.get_state().time_left == 30


def test_driver_resumes_on_next_question(sample_catalog, identity_random):
    manager = _short_timer_manager(sample_catalog, identity_random)
    manager.start_quiz("easy")
    driver = CountdownDriver(manager)
    while driver.on_second():
        pass

    manager.next_question()

    assert driver.should_run() is True
    assert manager.get_state().time_left == 3
    assert len(manager.get_state().answers) == 1
