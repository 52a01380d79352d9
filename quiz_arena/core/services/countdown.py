"""Per-second countdown driver for an in-progress question."""

from __future__ import annotations

from quiz_arena.core.models import SessionPhase
from quiz_arena.core.quiz_manager import QuizManager


class CountdownDriver:
    """Translates elapsed seconds into TICK and TIMEOUT commands.

    The owner calls :meth:`on_second` once per second from whatever timer it
    has (a ``QTimer`` in the desktop client) and stops that timer as soon as
    the method returns False.
    """

    def __init__(self, quiz_manager: QuizManager) -> None:
        self.quiz_manager = quiz_manager

    def should_run(self) -> bool:
        return self.quiz_manager.get_state().phase is SessionPhase.IN_PROGRESS

    def on_second(self) -> bool:
        if not self.should_run():
            return False

        state = self.quiz_manager.tick()
        if state.phase is SessionPhase.IN_PROGRESS and state.time_left == 0:
            state = self.quiz_manager.timeout()
        return state.phase is SessionPhase.IN_PROGRESS
