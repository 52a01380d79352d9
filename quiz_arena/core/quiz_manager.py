"""Business logic for driving one quiz session from a UI or API client."""

from __future__ import annotations

import logging
import random
from threading import Lock

from quiz_arena.core.models import Difficulty, QuestionRecord, SessionPhase, SessionState
from quiz_arena.core.question_selection import RandomSource
from quiz_arena.core.scoring import QuizSummary, summarize
from quiz_arena.core.services.question_catalog import QuestionCatalog
from quiz_arena.core.services.result_history import HistorySink, ResultHistory
from quiz_arena.core import session_machine
from quiz_arena.core.session_machine import (
    AnswerCommand,
    Command,
    DEFAULT_RULES,
    NextCommand,
    QuizRules,
    ResetCommand,
    StartCommand,
    TickCommand,
    TimeoutCommand,
)

logger = logging.getLogger(__name__)


class QuizManager:
    """Owns one session snapshot and serializes every command applied to it.

    The UI thread and the API worker thread may both call into a manager, so
    the read-modify-write of the snapshot happens under a single lock.
    """

    def __init__(
        self,
        catalog: QuestionCatalog | None = None,
        history: HistorySink | None = None,
        rules: QuizRules = DEFAULT_RULES,
        random_source: RandomSource | None = None,
    ) -> None:
        self._lock = Lock()
        self._catalog = catalog or QuestionCatalog()
        self._history = history if history is not None else ResultHistory()
        self._rules = rules
        self._random_source = random_source or random.Random()
        self._state = session_machine.initial_state()

    # --- Catalog ---

    def load_catalog(self, questions: list[QuestionRecord]) -> None:
        catalog = QuestionCatalog(questions)
        with self._lock:
            self._catalog = catalog
            self._state = session_machine.initial_state()

    def get_catalog(self) -> QuestionCatalog:
        with self._lock:
            return self._catalog

    def get_pool_sizes(self) -> dict[Difficulty, int]:
        with self._lock:
            return self._catalog.pool_sizes()

    def get_time_limit(self, difficulty: Difficulty | str) -> int:
        return self._rules.time_limit_for(Difficulty(difficulty))

    @property
    def history(self) -> HistorySink:
        return self._history

    # --- Settings ---

    def set_shuffle_seed(self, seed: int | None) -> None:
        with self._lock:
            self._random_source = random.Random(seed)

    # --- Session commands ---

    def start_quiz(self, difficulty: Difficulty | str) -> SessionState:
        with self._lock:
            command = StartCommand(difficulty, self._catalog, self._random_source)
            state = self._apply(command)
        logger.info(
            "Started %s quiz with %d questions", state.difficulty.value, state.total
        )
        return state

    def answer(self, option_index: int) -> SessionState:
        with self._lock:
            return self._apply(AnswerCommand(option_index))

    def timeout(self) -> SessionState:
        with self._lock:
            return self._apply(TimeoutCommand())

    def next_question(self) -> SessionState:
        with self._lock:
            return self._apply(NextCommand())

    def tick(self) -> SessionState:
        with self._lock:
            return self._apply(TickCommand())

    def reset(self) -> SessionState:
        with self._lock:
            return self._apply(ResetCommand())

    # --- Queries ---

    def get_state(self) -> SessionState:
        with self._lock:
            return self._state

    def get_summary(self) -> QuizSummary:
        """Summary of the finished session; raises SessionNotFinishedError otherwise."""
        with self._lock:
            return summarize(self._state)

    def _apply(self, command: Command) -> SessionState:
        previous = self._state
        state = session_machine.transition(previous, command, self._rules)
        if state is previous:
            logger.debug("Ignored %s in phase %s", type(command).__name__, previous.phase.name)
            return state

        self._state = state
        if previous.phase is not SessionPhase.FINISHED and state.phase is SessionPhase.FINISHED:
            summary = summarize(state)
            self._history.record(summary)
            logger.info(
                "Finished %s quiz: %d/%d (%s), best streak %d",
                summary.difficulty.value,
                summary.score,
                summary.total,
                summary.grade,
                summary.best_streak,
            )
        return state
